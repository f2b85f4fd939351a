"""In-process link store for development and tests."""

import asyncio
import itertools
import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Dict, List, Optional

from ..errors import DuplicateCode, NotFound
from .base import LinkStoreBase
from .models import Link


class MemoryLinkStore(LinkStoreBase):
    """Dictionary-backed link store.

    Each operation yields to the event loop once, standing in for the round
    trip to a database, and then applies its check and write with no further
    suspension point. That makes inserts and increments atomic with respect
    to other coroutines, the same guarantee the PostgreSQL store gets from
    its constraint and single-statement update.
    """

    def __init__(self, latency_seconds: float = 0, logger: Optional[logging.Logger] = None):
        self.latency_seconds = latency_seconds
        self.logger = logger or logging.getLogger(__name__)
        self._links: Dict[str, Link] = {}
        self._ids = itertools.count(1)

    async def _round_trip(self) -> None:
        await asyncio.sleep(self.latency_seconds)

    async def create(self, short_code: str, target_url: str) -> Link:
        await self._round_trip()

        if short_code in self._links:
            self.logger.warning(f"Short code already exists: {short_code}")
            raise DuplicateCode(short_code)

        now = datetime.now(timezone.utc)
        link = Link(
            id=next(self._ids),
            short_code=short_code,
            target_url=target_url,
            clicks=0,
            created_at=now,
            updated_at=now,
        )
        self._links[short_code] = link

        self.logger.info(f"Created link: {short_code} -> {target_url}")
        return replace(link)

    async def find_by_code(self, short_code: str) -> Link:
        await self._round_trip()

        link = self._links.get(short_code)
        if link is None:
            raise NotFound(f"Short code '{short_code}' not found")
        return replace(link)

    async def increment_clicks(self, short_code: str) -> None:
        await self._round_trip()

        link = self._links.get(short_code)
        if link is None:
            raise NotFound(f"Short code '{short_code}' not found")
        link.clicks += 1
        link.updated_at = datetime.now(timezone.utc)

    async def list_all(self, limit: Optional[int] = None) -> List[Link]:
        await self._round_trip()

        links = sorted(self._links.values(), key=lambda link: (-link.clicks, link.id))
        if limit is not None:
            links = links[:limit]
        return [replace(link) for link in links]

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        pass
