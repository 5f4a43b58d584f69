"""
Services package.

Provides request handling and upstream integrations.
"""

from .proxy_handler import ContentProxy, SubmissionIdGenerator
from .resource_registry import ResourceRegistry
from .search import SearchService
from .upstream_cache import UpstreamResponseCache
from .upstream_client import UpstreamClient

__all__ = [
    "ContentProxy",
    "SubmissionIdGenerator",
    "ResourceRegistry",
    "SearchService",
    "UpstreamResponseCache",
    "UpstreamClient",
]
