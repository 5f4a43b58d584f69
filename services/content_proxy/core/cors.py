"""
CORS and cache header helpers shared by every proxied route.
"""

from typing import Dict

from fastapi import Response

CORS_HEADERS: Dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}


def cache_control(cache_seconds: int, stale_seconds: int) -> str:
    """Shared-cache policy for a GET resource that upstream data may be reused for."""
    return f"public, s-maxage={cache_seconds}, stale-while-revalidate={stale_seconds}"


def response_headers(cache_seconds: int = 0, stale_seconds: int = 0) -> Dict[str, str]:
    headers = dict(CORS_HEADERS)
    if cache_seconds > 0:
        headers["Cache-Control"] = cache_control(cache_seconds, stale_seconds)
    return headers


def preflight_response() -> Response:
    """Empty 200 answer to an OPTIONS pre-flight."""
    return Response(status_code=200, headers=dict(CORS_HEADERS))
