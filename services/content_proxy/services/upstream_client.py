"""
Upstream Client

Builds backend URLs for proxied resources and performs the single outbound
call each request needs, translating transport/status/decode failures into
UpstreamError subclasses.
"""

import json
import logging
from typing import Any, Mapping, Optional
from urllib.parse import quote

import httpx

from ..core.exceptions import (
    UpstreamDecodeError,
    UpstreamStatusError,
    UpstreamUnreachableError,
)
from .upstream_cache import UpstreamResponseCache

logger = logging.getLogger("content_proxy.upstream")

_SNIPPET_LENGTH = 500


class UpstreamClient:
    def __init__(
        self,
        client: httpx.AsyncClient,
        base_url: str,
        cache: Optional[UpstreamResponseCache] = None,
    ):
        """
        Args:
            client: Shared httpx.AsyncClient
            base_url: Content backend base URL (e.g. https://host/api)
            cache: Response cache for GET resources with a cache window
        """
        self.client = client
        self.base_url = base_url.rstrip("/")
        self.cache = cache

    def build_url(
        self,
        upstream_path: str,
        path_params: Optional[Mapping[str, str]] = None,
        query_string: str = "",
    ) -> str:
        """
        Concatenate base URL, resource path and the inbound query string.

        `{name}` placeholders in the path are filled from path_params
        (URL-quoted); the query string is appended verbatim.
        """
        path = upstream_path
        for key, value in (path_params or {}).items():
            path = path.replace(f"{{{key}}}", quote(str(value), safe=""))
        if not path.startswith("/"):
            path = f"/{path}"

        url = f"{self.base_url}{path}"
        if query_string:
            url = f"{url}?{query_string}"
        return url

    async def fetch_json(
        self,
        url: str,
        method: str = "GET",
        body: Any = None,
        cache_seconds: int = 0,
    ) -> Any:
        """
        Call the backend and return the decoded JSON payload.

        Raises:
            UpstreamUnreachableError: transport failure (connect, DNS, timeout)
            UpstreamStatusError: non-2xx response
            UpstreamDecodeError: empty or non-JSON body
        """
        cacheable = method == "GET" and cache_seconds > 0 and self.cache is not None
        if cacheable:
            cached = self.cache.get(url)
            if cached is not None:
                logger.debug(f"Upstream cache hit: {url}")
                return cached

        try:
            response = await self.client.request(method, url, json=body)
        except httpx.RequestError as e:
            logger.error(
                f"Upstream request failed: {method} {url}",
                extra={
                    "upstream_url": url,
                    "error_type": type(e).__name__,
                    "error_detail": str(e),
                },
            )
            raise UpstreamUnreachableError(url, e) from e

        if not response.is_success:
            snippet = response.text[:_SNIPPET_LENGTH]
            logger.warning(
                f"Upstream responded with status {response.status_code}: {method} {url}",
                extra={
                    "upstream_url": url,
                    "status_code": response.status_code,
                    "snippet": snippet,
                },
            )
            raise UpstreamStatusError(url, response.status_code, snippet)

        payload = self._decode(url, response)
        if cacheable:
            self.cache.set(url, payload, cache_seconds)
        return payload

    def _decode(self, url: str, response: httpx.Response) -> Any:
        text = response.text
        if not text or not text.strip():
            logger.warning(f"Empty response from upstream: {url}")
            raise UpstreamDecodeError(url, "Empty response from API")
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            logger.warning(
                "Failed to parse upstream response body as JSON.",
                extra={"upstream_url": url, "snippet": text[:200]},
            )
            raise UpstreamDecodeError(url, str(e)) from e
