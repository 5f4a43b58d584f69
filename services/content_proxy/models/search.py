"""
Global search models.
"""

from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field

SearchType = Literal[
    "article", "blog", "course", "author", "book", "event", "fatwa", "awlyaa", "tasawwuf"
]

SEARCH_TYPES: List[str] = [
    "article",
    "blog",
    "course",
    "author",
    "book",
    "event",
    "fatwa",
    "awlyaa",
    "tasawwuf",
]


def empty_type_counts() -> Dict[str, int]:
    return {t: 0 for t in SEARCH_TYPES}


class SearchResult(BaseModel):
    type: SearchType
    id: Optional[Union[int, str]] = None
    title: str
    description: Optional[str] = None
    slug: Optional[str] = None
    url: str
    image: Optional[str] = None
    date: Optional[str] = None
    author: Optional[str] = None
    score: Optional[float] = None


class SearchResponse(BaseModel):
    success: bool
    query: str
    results: List[SearchResult] = Field(default_factory=list)
    total: int = 0
    types: Dict[str, int] = Field(default_factory=empty_type_counts)
    error: Optional[str] = None

    def to_content(self) -> dict:
        return self.model_dump(exclude_none=True)
