"""Resolution of short codes to redirect targets with click tracking."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional, Set

from .database.base import LinkStoreBase
from .database.cache import RedisCache
from .errors import NotFound
from .service import call_with_read_retry


@dataclass(frozen=True)
class RedirectTarget:
    """Where a resolved short code sends the visitor."""

    short_code: str
    target_url: str


class RedirectResolver:
    """Looks up short codes and records visits without delaying the redirect.

    Each successful resolution schedules a click increment as its own task on
    the running loop. The task is not tied to the request, so it completes
    even if the client disconnects, and its failures are logged rather than
    raised. Pending tasks are tracked so shutdown can wait for them.
    """

    def __init__(
        self,
        store: LinkStoreBase,
        cache: Optional[RedisCache] = None,
        logger: Optional[logging.Logger] = None,
        read_retries: int = 0,
    ):
        self.store = store
        self.cache = cache
        self.logger = logger or logging.getLogger(__name__)
        self.read_retries = read_retries
        self._pending: Set[asyncio.Task] = set()

    async def resolve(self, short_code: str) -> RedirectTarget:
        """Resolve a short code and schedule its click increment.

        Raises:
            NotFound: If the code is not registered
            StoreUnavailable: If the lookup itself fails
        """
        target_url = None
        if self.cache:
            target_url = await self.cache.get_target(short_code)
            if target_url:
                self.logger.debug(f"Cache hit for {short_code}")

        if not target_url:
            link = await call_with_read_retry(
                self.store.find_by_code,
                short_code,
                retries=self.read_retries,
                logger=self.logger,
            )
            target_url = link.target_url
            if self.cache:
                await self.cache.set_target(short_code, target_url)

        self._schedule_click(short_code)
        return RedirectTarget(short_code=short_code, target_url=target_url)

    def _schedule_click(self, short_code: str) -> None:
        task = asyncio.get_running_loop().create_task(self._record_click(short_code))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _record_click(self, short_code: str) -> None:
        try:
            await self.store.increment_clicks(short_code)
        except NotFound:
            self.logger.warning(f"Click not recorded, short code no longer exists: {short_code}")
        except Exception as e:
            self.logger.error(f"Click not recorded for {short_code}: {type(e).__name__}: {e}")

    @property
    def pending_clicks(self) -> int:
        return len(self._pending)

    async def drain(self) -> None:
        """Wait for all scheduled click increments to finish."""
        while self._pending:
            await asyncio.wait(list(self._pending))

    async def close(self) -> None:
        if self._pending:
            self.logger.info(f"Waiting for {len(self._pending)} pending click updates")
        await self.drain()
