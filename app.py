#!/usr/bin/env python3
"""
Main entry point for the Micro-Link service.

Concurrency: requests are served with async I/O (FastAPI + asyncpg connection
pool + redis.asyncio). Set WORKERS > 1 for multi-process scaling; each worker
has its own DB pool.

Usage:
    python app.py

Environment variables:
    DATABASE_URL - PostgreSQL DSN (POSTGRES_URI is also accepted), or memory://
    CREATE_TABLES - Set to 'true' to create the links table on startup
    REDIS_URL - Redis connection URL (optional)
    BASE_URL - Base URL for short links
    PORT - Port to listen on
    WORKERS - Number of uvicorn worker processes (default 1)
    LOG_LEVEL - Logging level
"""

import signal
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config import load_config
from microlink.common.logging_config import setup_logging
from microlink.database import RedisCache, create_link_store
from microlink.resolver import RedirectResolver
from microlink.service import LinkService
from web_app import create_app


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Wire the store, cache, service and resolver for the app's lifetime."""
    config = app.state.config
    logger = app.state.logger

    logger.info("Starting Micro-Link service...")

    store = create_link_store(config, logger=logger)
    if config.create_tables and hasattr(store, "ensure_schema"):
        await store.ensure_schema()

    cache = None
    if config.redis_url:
        cache = RedisCache(
            redis_url=config.redis_url,
            ttl_seconds=config.cache_ttl_seconds,
            logger=logger,
        )
        await cache.connect()
    else:
        logger.info("Redis caching disabled")

    service = LinkService(
        store=store,
        cache=cache,
        logger=logger,
        read_retries=config.read_retries,
    )
    resolver = RedirectResolver(
        store=store,
        cache=cache,
        logger=logger,
        read_retries=config.read_retries,
    )

    app.state.store = store
    app.state.cache = cache
    app.state.service = service
    app.state.resolver = resolver

    logger.info("Service started successfully")

    yield

    logger.info("Shutting down Micro-Link service...")

    # Let in-flight click increments land before the pool goes away
    await resolver.close()
    await service.close()

    logger.info("Service stopped")


def main():
    """Main entry point."""
    config = load_config()

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    logger.info("Micro-Link Service")
    logger.info(f"Configuration: {config.model_dump(exclude={'database_url', 'redis_url'})}")

    # Instances are created in lifespan
    app = create_app(
        store_instance=None,
        cache_instance=None,
        service_instance=None,
        resolver_instance=None,
        config=config,
    )
    app.state.logger = logger
    app.router.lifespan_context = lifespan

    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        workers=config.workers,
        log_level=config.log_level.lower(),
        access_log=True,
    )

    server = uvicorn.Server(uvicorn_config)

    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        server.should_exit = True

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    try:
        logger.info(f"Starting server on {config.host}:{config.port}")
        server.run()
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
