"""
Route registration.

Where: services/content_proxy/api/routes.py
What: Turn every resources.yml entry into FastAPI routes, plus an OPTIONS
      pre-flight route per path.
Why: Resources are configuration; the handler is shared.
"""

import logging
from typing import List

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse

from ..core.cors import preflight_response
from ..models.resource import ResourceSpec
from ..services.resource_registry import ResourceRegistry
from .deps import ContentProxyDep

logger = logging.getLogger("content_proxy.routes")


def _make_endpoint(resource: ResourceSpec):
    async def endpoint(request: Request, proxy: ContentProxyDep) -> JSONResponse:
        return await proxy.handle(resource, request)

    endpoint.__name__ = resource.name.replace("-", "_")
    return endpoint


async def _preflight() -> Response:
    return preflight_response()


def register_resource_routes(app: FastAPI, registry: ResourceRegistry) -> List[str]:
    """
    Register one route per resource and one OPTIONS route per distinct path.

    Returns:
        The registered paths
    """
    paths = []
    for path, resources in registry.routes().items():
        for resource in resources:
            methods = [m for m in resource.methods if m != "OPTIONS"]
            app.add_api_route(
                path,
                _make_endpoint(resource),
                methods=methods,
                name=resource.name,
                tags=["content"],
            )
        app.add_api_route(
            path,
            _preflight,
            methods=["OPTIONS"],
            include_in_schema=False,
        )
        paths.append(path)

    logger.info(f"Registered {len(paths)} proxied paths")
    return paths
