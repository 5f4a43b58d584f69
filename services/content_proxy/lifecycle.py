"""
Where: services/content_proxy/lifecycle.py
What: Startup/shutdown orchestration for shared resources.
Why: Keep main.py focused on app assembly while preserving lifecycle behavior.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from services.common.core.http_client import HttpClientFactory

from .config import ProxyConfig
from .services.proxy_handler import ContentProxy, SubmissionIdGenerator
from .services.search import SearchService
from .services.upstream_cache import UpstreamResponseCache
from .services.upstream_client import UpstreamClient

logger = logging.getLogger("content_proxy.main")


@asynccontextmanager
async def manage_lifespan(app: FastAPI, proxy_config: ProxyConfig) -> AsyncIterator[None]:
    """Manage application lifecycle."""
    factory = HttpClientFactory(proxy_config)
    client = factory.create_async_client(timeout=proxy_config.UPSTREAM_TIMEOUT)

    cache = UpstreamResponseCache(max_size=proxy_config.UPSTREAM_CACHE_MAX_SIZE)

    try:
        upstream = UpstreamClient(client, proxy_config.UPSTREAM_BASE_URL, cache=cache)

        app.state.http_client = client
        app.state.upstream_cache = cache
        app.state.content_proxy = ContentProxy(
            upstream=upstream,
            search_service=SearchService(upstream),
            id_generator=SubmissionIdGenerator(),
            stale_seconds=proxy_config.STALE_WHILE_REVALIDATE_SECONDS,
        )

        logger.info(
            "Content proxy initialized",
            extra={"upstream_base_url": proxy_config.UPSTREAM_BASE_URL},
        )
        yield
    finally:
        logger.info(
            "Content proxy shutting down, closing http client.",
            extra={"cached_responses": len(cache)},
        )
        cache.clear()
        await client.aclose()
