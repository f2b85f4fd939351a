"""Persistence layer for short links."""

import logging
from typing import Optional

from .base import LinkStoreBase
from .cache import RedisCache
from .memory import MemoryLinkStore
from .models import Link
from .postgres import PostgresLinkStore

__all__ = [
    "LinkStoreBase",
    "MemoryLinkStore",
    "PostgresLinkStore",
    "RedisCache",
    "Link",
    "create_link_store",
]


def create_link_store(config, logger: Optional[logging.Logger] = None) -> LinkStoreBase:
    """Build the store selected by config.database_url.

    ``memory://`` gives an in-process store; anything else is treated as a
    PostgreSQL DSN.
    """
    if config.database_url.startswith("memory://"):
        return MemoryLinkStore(logger=logger)

    return PostgresLinkStore(
        db_config=config.database_url,
        pool_min_size=config.database_pool_min_size,
        pool_max_size=config.database_pool_max_size,
        connection_timeout_seconds=config.database_timeout_seconds,
        logger=logger,
    )
