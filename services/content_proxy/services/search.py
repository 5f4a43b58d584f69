"""
Global search.

Forwards the query to the backend's global search endpoint, turns whatever
result layout it returns into SearchResult items that link to site pages,
and drops items that do not actually match the query.
"""

import logging
import re
from collections import Counter
from typing import Any, Dict, Iterable, List, Optional, Tuple
from urllib.parse import quote

from pydantic import ValidationError

from ..core.exceptions import UpstreamError
from ..models.resource import ResourceSpec
from ..models.search import SEARCH_TYPES, SearchResponse, SearchResult, empty_type_counts
from .upstream_client import UpstreamClient

logger = logging.getLogger("content_proxy.search")

_PUNCTUATION_RE = re.compile(r"[؟!.,;:]+")

# Pashto function words and numerals carry no search meaning.
STOP_WORDS = frozenset(
    {
        "د", "دی", "څو", "ته", "وايې", "او", "یا", "چی", "کې", "په", "نه", "دا",
        "دغه", "هغه", "یو", "دوه", "درې", "څلور", "پنځه", "شپږ", "اووم", "اتم",
        "نهم", "لسه", "کول", "کړل", "کړې", "کړي", "کېږي", "کېدل", "کېږې", "کېدې",
        "کېدي", "شو", "شوه", "شوي", "وي", "وو", "وې", "؟", "!", ".", ",", ";", ":",
    }
)

MODEL_TYPE_MAP: Dict[str, str] = {
    "article": "article",
    "articles": "article",
    "blog": "blog",
    "blogs": "blog",
    "book": "book",
    "books": "book",
    "course": "course",
    "courses": "course",
    "author": "author",
    "authors": "author",
    "event": "event",
    "events": "event",
    "darul-ifta": "fatwa",
    "iftah": "fatwa",
    "fatwa": "fatwa",
    # tags and sub-categories are navigation entries into the fatwa section
    "tag": "fatwa",
    "iftah-sub-category": "fatwa",
    "awlyaa": "awlyaa",
    "awlyaas": "awlyaa",
    "tasawwuf": "tasawwuf",
    "tasawwufs": "tasawwuf",
}

_URL_PATTERNS: Dict[str, Tuple[str, bool]] = {
    # type -> (prefix, prefer slug over id)
    "article": ("/articles", True),
    "blog": ("/blogs", True),
    "course": ("/courses", True),
    "author": ("/authors", False),
    "book": ("/book", False),
    "event": ("/event", True),
    "fatwa": ("/iftah", True),
    "awlyaa": ("/awlayaa", False),
    "tasawwuf": ("/tasawwuf", True),
}


def map_model_type(model_type: str) -> str:
    return MODEL_TYPE_MAP.get(str(model_type).lower(), "article")


def build_url(result_type: str, item: Dict[str, Any], model_type: str = "") -> str:
    model_type = str(model_type).lower()
    if model_type in ("tag", "tags"):
        tag_id = item.get("id") or item.get("tag_id")
        if tag_id:
            return f"/iftah/category/{quote(str(item.get('name') or tag_id), safe='')}"
        return "/iftah"
    if model_type in ("iftah-sub-category", "iftah_sub_category"):
        sub_id = item.get("id") or item.get("sub_category_id") or item.get("iftah_sub_category_id")
        return f"/iftah/sub-category/{sub_id}" if sub_id else "/iftah"

    pattern = _URL_PATTERNS.get(result_type)
    if pattern is None:
        return "/"
    prefix, prefer_slug = pattern
    key = (item.get("slug") or item.get("id")) if prefer_slug else item.get("id")
    return f"{prefix}/{key}"


def _full_name(person: Any) -> Optional[str]:
    if not isinstance(person, dict):
        return None
    name = f"{person.get('first_name') or ''} {person.get('last_name') or ''}".strip()
    return name or None


def extract_title(item: Dict[str, Any]) -> Optional[str]:
    return item.get("title") or item.get("name") or item.get("question") or _full_name(item)


def extract_author(item: Dict[str, Any]) -> Optional[str]:
    author = item.get("author")
    if isinstance(author, dict) and author.get("name"):
        return author["name"]
    return _full_name(author) or _full_name(item.get("recorded_by"))


def _optional_str(value: Any) -> Optional[str]:
    return str(value) if value is not None else None


def transform_item(item: Any, model_type: str) -> Optional[SearchResult]:
    """Convert one backend search hit; returns None for hits without a usable title."""
    if not isinstance(item, dict):
        return None
    title = extract_title(item)
    if not title:
        return None

    result_type = map_model_type(model_type)
    date = item.get("created_at") or item.get("publishedAt") or item.get("date") or item.get("written_year")
    score = item.get("score") or item.get("relevance_score")
    try:
        return SearchResult(
            type=result_type,
            id=item.get("id") or item.get("slug"),
            title=str(title),
            description=_optional_str(
                item.get("description") or item.get("excerpt") or item.get("answer") or item.get("bio")
            ),
            slug=_optional_str(item.get("slug")),
            url=build_url(result_type, item, model_type),
            image=_optional_str(item.get("image") or item.get("featuredImage") or item.get("photo")),
            date=_optional_str(date),
            author=extract_author(item),
            score=score if isinstance(score, (int, float)) else None,
        )
    except ValidationError as e:
        logger.debug(f"Skipping malformed search hit: {e}")
        return None


def _item_model_type(item: Any) -> str:
    if isinstance(item, dict):
        return item.get("model_type") or item.get("type") or item.get("model") or "article"
    return "article"


def iter_hits(payload: Any) -> Iterable[Tuple[Any, str]]:
    """Yield (item, model_type) pairs from any of the backend's result layouts."""
    if isinstance(payload, dict) and isinstance(payload.get("data"), list):
        items = payload["data"]
    elif isinstance(payload, dict) and isinstance(payload.get("results"), list):
        items = payload["results"]
    elif isinstance(payload, list):
        items = payload
    elif isinstance(payload, dict):
        # Grouped by model type: {"articles": [...], "darul-ifta": [...]}
        for key, value in payload.items():
            if isinstance(value, list):
                for item in value:
                    yield item, key
        return
    else:
        return

    for item in items:
        yield item, _item_model_type(item)


def _strip_punctuation(text: str) -> str:
    return _PUNCTUATION_RE.sub("", text)


def matches_query(result: SearchResult, query: str) -> bool:
    """
    Relevance filter.

    An exact phrase longer than five characters always matches; otherwise
    every meaningful term (queries of up to two terms) or at least 60% of
    them must appear in the title, description or author.
    """
    search_term = query.lower().strip()
    searchable = _strip_punctuation(
        " ".join(p for p in (result.title, result.description, result.author) if p).lower()
    )

    all_words = [w for w in search_term.split() if w]
    meaningful = [
        w for w in all_words if len(w) > 1 and w not in STOP_WORDS and _strip_punctuation(w)
    ]
    phrase = _strip_punctuation(search_term).strip()
    terms = meaningful or all_words

    if len(phrase) > 5 and phrase in searchable:
        return True

    if terms:
        matched = sum(1 for term in terms if term in searchable)
        required = 1.0 if len(terms) <= 2 else 0.6
        if matched / len(terms) >= required:
            return True

    return not meaningful and phrase in searchable


def count_types(results: List[SearchResult]) -> Dict[str, int]:
    counts = Counter(r.type for r in results)
    return {t: counts.get(t, 0) for t in SEARCH_TYPES}


class SearchService:
    def __init__(self, upstream: UpstreamClient):
        self.upstream = upstream

    async def search(self, resource: ResourceSpec, query: str) -> SearchResponse:
        """
        Run a global search. Never raises for upstream failures; they come
        back as `success: False` with an empty result set.
        """
        stripped = query.strip()
        if not stripped:
            return SearchResponse(success=True, query="")

        url = self.upstream.build_url(
            resource.upstream_path or "/search/global",
            query_string=f"q={quote(stripped, safe='')}",
        )
        try:
            payload = await self.upstream.fetch_json(url, cache_seconds=resource.cache_seconds)
        except UpstreamError as e:
            logger.error(
                "Global search failed",
                extra={"query": query, "upstream_url": url, "error_detail": e.detail},
            )
            return SearchResponse(
                success=False, query=query, types=empty_type_counts(), error=e.public_message
            )

        results = []
        for item, model_type in iter_hits(payload):
            transformed = transform_item(item, model_type)
            if transformed is not None and matches_query(transformed, query):
                results.append(transformed)

        return SearchResponse(
            success=True,
            query=query,
            results=results,
            total=len(results),
            types=count_types(results),
        )
