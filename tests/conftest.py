"""Pytest configuration and fixtures."""

from typing import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from config import Config
from microlink.common.logging_config import setup_logging
from microlink.database.memory import MemoryLinkStore
from microlink.resolver import RedirectResolver
from microlink.service import LinkService
from web_app import create_app


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def store(logger):
    """In-process store; each test gets a fresh one."""
    return MemoryLinkStore(logger=logger)


@pytest.fixture
def service(store, logger) -> LinkService:
    return LinkService(store=store, cache=None, logger=logger)


@pytest.fixture
async def resolver(store, logger) -> AsyncGenerator[RedirectResolver, None]:
    resolver = RedirectResolver(store=store, cache=None, logger=logger)
    yield resolver
    await resolver.close()


@pytest.fixture
def config():
    return Config(database_url="memory://", base_url="http://testserver")


@pytest.fixture
def app(store, service, resolver, config):
    """Create test FastAPI app."""
    return create_app(
        store_instance=store,
        cache_instance=None,
        service_instance=service,
        resolver_instance=resolver,
        config=config,
    )


@pytest.fixture
async def client(app):
    """Create test client."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def sample_links():
    """Sample (short_code, target_url) pairs."""
    return [
        ("example", "https://example.com/test"),
        ("repo", "https://github.com/user/repo"),
        ("so", "https://stackoverflow.com/questions/123456"),
    ]
