"""
Dependency Injection for the content proxy API.

Manage request handler dependencies using FastAPI Depends.
"""

from typing import Annotated

from fastapi import Depends, Request

from ..services.proxy_handler import ContentProxy
from ..services.resource_registry import ResourceRegistry


def get_content_proxy(request: Request) -> ContentProxy:
    return request.app.state.content_proxy


def get_resource_registry(request: Request) -> ResourceRegistry:
    return request.app.state.resource_registry


ContentProxyDep = Annotated[ContentProxy, Depends(get_content_proxy)]
ResourceRegistryDep = Annotated[ResourceRegistry, Depends(get_resource_registry)]
