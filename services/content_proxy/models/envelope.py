"""
Response envelope models.
"""

from typing import Any, Optional

from pydantic import BaseModel


class PaginationInfo(BaseModel):
    """Pagination metadata derived from page, limit and total."""

    current_page: int
    per_page: int
    total: int
    total_pages: int
    has_next_page: bool
    has_prev_page: bool
    next_page: Optional[int] = None
    prev_page: Optional[int] = None


class Envelope(BaseModel):
    """Normalized `{success, data, error?, pagination?}` response."""

    success: bool
    data: Any = None
    error: Optional[str] = None
    message: Optional[str] = None
    pagination: Optional[PaginationInfo] = None

    def to_content(self) -> dict:
        # Only optional top-level keys are omitted; `data` and nested nulls stay.
        return self.model_dump(
            exclude={k for k in ("error", "message", "pagination") if getattr(self, k) is None}
        )
