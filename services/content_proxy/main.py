"""
Content Proxy - API proxy for the portal frontend

Forwards /api/* requests to the content backend based on resources.yml,
normalizes the JSON it returns and falls back to safe payloads on failure.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI

from .api.deps import ResourceRegistryDep
from .api.routes import register_resource_routes
from .config import ProxyConfig, config
from .core.logging_config import setup_logging
from .exceptions import register_exception_handlers
from .lifecycle import manage_lifespan
from .middleware import request_context_middleware
from .services.resource_registry import ResourceRegistry

logger = logging.getLogger("content_proxy.main")


def create_app(proxy_config: Optional[ProxyConfig] = None) -> FastAPI:
    """Assemble the application for the given configuration."""
    proxy_config = proxy_config or config

    def lifespan(app: FastAPI):
        return manage_lifespan(app, proxy_config)

    app = FastAPI(
        title="Content Proxy",
        version="1.0.0",
        lifespan=lifespan,
        root_path=proxy_config.root_path,
    )

    registry = ResourceRegistry(proxy_config.RESOURCES_CONFIG_PATH)
    registry.load_resources_config()
    app.state.resource_registry = registry

    app.middleware("http")(request_context_middleware)
    register_exception_handlers(app)

    @app.get("/health")
    async def health_check(registry: ResourceRegistryDep):
        """Health check endpoint."""
        return {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "resources": len(registry.list_resources()),
        }

    register_resource_routes(app, registry)
    return app


def uvicorn_options(proxy_config: ProxyConfig) -> dict:
    """Server settings for uvicorn.run derived from UVICORN_BIND_ADDR and UVICORN_WORKERS."""
    host, _, port = proxy_config.UVICORN_BIND_ADDR.rpartition(":")
    return {
        "host": host or "0.0.0.0",
        "port": int(port or 8000),
        "workers": proxy_config.UVICORN_WORKERS,
    }


setup_logging(config.LOG_CONFIG_PATH)
app = create_app()


if __name__ == "__main__":
    import uvicorn

    # Multiple workers need the app as an import string.
    uvicorn.run("services.content_proxy.main:app", **uvicorn_options(config))
