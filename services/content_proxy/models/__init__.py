"""
Data model definitions package.

Aggregates Pydantic models for use in other modules.
"""

from .envelope import Envelope, PaginationInfo
from .resource import ResourceSpec
from .search import SearchResponse, SearchResult

__all__ = [
    "Envelope",
    "PaginationInfo",
    "ResourceSpec",
    "SearchResponse",
    "SearchResult",
]
