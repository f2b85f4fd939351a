"""Business logic for registering and listing short links."""

import logging
from typing import Awaitable, Callable, Dict, List, Optional, TypeVar

from .common.validators import is_valid_short_code, is_valid_url, normalize_target_url
from .database.base import LinkStoreBase
from .database.cache import RedisCache
from .database.models import Link
from .errors import CodeConflict, DuplicateCode, InvalidInput, StoreUnavailable

T = TypeVar("T")


async def call_with_read_retry(
    operation: Callable[..., Awaitable[T]],
    *args,
    retries: int = 0,
    logger: Optional[logging.Logger] = None,
) -> T:
    """Run a read-only store call, retrying on StoreUnavailable.

    Args:
        operation: Store coroutine function
        *args: Arguments for the operation
        retries: Number of extra attempts after the first failure
        logger: Optional logger for retry warnings
    """
    logger = logger or logging.getLogger(__name__)
    attempt = 0
    while True:
        try:
            return await operation(*args)
        except StoreUnavailable:
            if attempt >= retries:
                raise
            attempt += 1
            logger.warning(f"Store unavailable, retrying read (attempt {attempt + 1}/{retries + 1})")


class LinkService:
    """Validates requests and orchestrates link store operations."""

    def __init__(
        self,
        store: LinkStoreBase,
        cache: Optional[RedisCache] = None,
        logger: Optional[logging.Logger] = None,
        read_retries: int = 0,
    ):
        """Initialize the link service.

        Args:
            store: Link store instance
            cache: Optional redirect cache, warmed on registration
            logger: Optional logger
            read_retries: Extra attempts for reads that hit StoreUnavailable
        """
        self.store = store
        self.cache = cache
        self.logger = logger or logging.getLogger(__name__)
        self.read_retries = read_retries

    async def register_link(self, short_code: str, target_url: str) -> Link:
        """Register a short code for a target URL.

        The target URL gets an ``https://`` prefix when it has no scheme. The
        uniqueness check is left to the store's constraint, so of several
        concurrent registrations of one code exactly one succeeds.

        Returns:
            The persisted link

        Raises:
            InvalidInput: If a field is missing or malformed
            CodeConflict: If the short code is already registered
            StoreUnavailable: If the store fails
        """
        if not isinstance(short_code, str) or not isinstance(target_url, str):
            raise InvalidInput("short_code and target_url must be strings")

        short_code = short_code.strip()
        if not short_code or not target_url.strip():
            raise InvalidInput("short_code and target_url are required")

        is_valid, error = is_valid_short_code(short_code)
        if not is_valid:
            raise InvalidInput(error)

        target_url = normalize_target_url(target_url)
        is_valid, error = is_valid_url(target_url)
        if not is_valid:
            raise InvalidInput(error)

        try:
            link = await self.store.create(short_code, target_url)
        except DuplicateCode:
            raise CodeConflict(f"Short code '{short_code}' already exists") from None

        if self.cache:
            await self.cache.set_target(link.short_code, link.target_url)

        self.logger.info(f"Registered link: {link.short_code} -> {link.target_url}")
        return link

    async def get_link(self, short_code: str) -> Link:
        """Return the stored record for a short code without counting a click.

        Raises:
            NotFound: If the code is not registered
        """
        return await call_with_read_retry(
            self.store.find_by_code,
            short_code,
            retries=self.read_retries,
            logger=self.logger,
        )

    async def list_links(self, limit: Optional[int] = None) -> List[Link]:
        """List links with the highest click counts first."""
        return await call_with_read_retry(
            self.store.list_all,
            limit,
            retries=self.read_retries,
            logger=self.logger,
        )

    async def health_check(self) -> Dict[str, bool]:
        db_healthy = await self.store.health_check()

        cache_healthy = True
        if self.cache and self.cache.enabled:
            cache_healthy = await self.cache.ping()

        return {
            "database": db_healthy,
            "cache": cache_healthy,
            "overall": db_healthy and cache_healthy,
        }

    async def close(self) -> None:
        """Close store and cache connections."""
        await self.store.close()
        if self.cache:
            await self.cache.close()
