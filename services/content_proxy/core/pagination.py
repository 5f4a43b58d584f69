"""
Pagination helpers for list endpoints.
"""

from typing import Any, Mapping, Tuple

from ..models.envelope import PaginationInfo

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


def _positive_int(raw: Any, default: int) -> int:
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return default
    return value if value >= 1 else default


def parse_page_params(query_params: Mapping[str, Any]) -> Tuple[int, int]:
    """
    Read `page` and `limit` from query parameters.

    Missing, non-numeric or non-positive values fall back to 1 and 10.
    """
    page = _positive_int(query_params.get("page"), DEFAULT_PAGE)
    limit = _positive_int(query_params.get("limit"), DEFAULT_LIMIT)
    return page, limit


def build_pagination(page: int, limit: int, total: int) -> PaginationInfo:
    """
    Derive pagination metadata.

    total_pages is ceil(total / limit); there is a next page only while
    page < total_pages, and a previous page whenever page > 1.
    """
    total_pages = -(-total // limit)
    has_next = page < total_pages
    has_prev = page > 1
    return PaginationInfo(
        current_page=page,
        per_page=limit,
        total=total,
        total_pages=total_pages,
        has_next_page=has_next,
        has_prev_page=has_prev,
        next_page=page + 1 if has_next else None,
        prev_page=page - 1 if has_prev else None,
    )
