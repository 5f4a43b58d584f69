"""
Content Proxy Service

One shared request handler for every resource in resources.yml. The
resource's mode decides whether the request is forwarded upstream, answered
from static data, or simulated locally; every failure is turned into a
fallback envelope so the frontend can render an empty state.
"""

import copy
import logging
import time
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Mapping

from fastapi import Request
from fastapi.responses import JSONResponse

from ..core.cors import response_headers
from ..core.exceptions import InvalidRequestBodyError, UpstreamError
from ..core.normalize import fallback_envelope, shape_payload
from ..core.pagination import build_pagination, parse_page_params
from ..models.envelope import Envelope
from ..models.resource import ResourceSpec
from .search import SearchService
from .upstream_client import UpstreamClient

logger = logging.getLogger("content_proxy.handler")


class SubmissionIdGenerator:
    """
    Millisecond-timestamp identifiers, strictly increasing within a process.
    """

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._last = 0

    def next_id(self) -> int:
        self._last = max(int(self._clock() * 1000), self._last + 1)
        return self._last


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a Z suffix."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ContentProxy:
    def __init__(
        self,
        upstream: UpstreamClient,
        search_service: SearchService,
        id_generator: SubmissionIdGenerator,
        stale_seconds: int = 300,
    ):
        """
        Args:
            upstream: UpstreamClient bound to the content backend
            search_service: SearchService for the global search resource
            id_generator: Source of identifiers for simulated submissions
            stale_seconds: stale-while-revalidate window on cacheable responses
        """
        self.upstream = upstream
        self.search_service = search_service
        self.id_generator = id_generator
        self.stale_seconds = stale_seconds

    async def handle(self, resource: ResourceSpec, request: Request) -> JSONResponse:
        path_params: Dict[str, str] = dict(request.path_params)

        if resource.mode == "static":
            return self._json(Envelope(success=True, data=copy.deepcopy(resource.static_data or [])))
        if resource.mode == "stub_list":
            return self._stub_list(resource, request)
        if resource.mode == "echo":
            return await self._echo(resource, request)
        if resource.mode == "search":
            return await self._search(resource, request)
        return await self._proxy(resource, request, path_params)

    async def _proxy(
        self, resource: ResourceSpec, request: Request, path_params: Mapping[str, str]
    ) -> JSONResponse:
        url = self.upstream.build_url(resource.upstream_path or "/", path_params, request.url.query)
        method = resource.forward_method
        try:
            body = await self._read_json_body(request) if method == "POST" else None
            payload = await self.upstream.fetch_json(
                url, method=method, body=body, cache_seconds=resource.cache_seconds
            )
        except (UpstreamError, InvalidRequestBodyError) as e:
            logger.warning(
                f"Serving fallback for resource '{resource.name}'",
                extra={
                    "resource": resource.name,
                    "upstream_url": url,
                    "error_type": type(e).__name__,
                    "error_detail": str(e),
                },
            )
            return self._json(fallback_envelope(resource, e.public_message, path_params))

        return self._json(
            shape_payload(resource, payload, path_params), cache_seconds=resource.cache_seconds
        )

    def _stub_list(self, resource: ResourceSpec, request: Request) -> JSONResponse:
        # Nothing is stored locally; the list is whatever static_data holds.
        items = list(resource.static_data or [])
        page, limit = parse_page_params(request.query_params)
        start = (page - 1) * limit
        envelope = Envelope(
            success=True,
            data=items[start : start + limit],
            pagination=build_pagination(page, limit, len(items)),
        )
        return self._json(envelope)

    async def _echo(self, resource: ResourceSpec, request: Request) -> JSONResponse:
        try:
            body = await self._read_json_body(request)
            if not isinstance(body, dict):
                raise InvalidRequestBodyError("Request body must be a JSON object")
        except InvalidRequestBodyError as e:
            logger.warning(
                f"Rejected submission for resource '{resource.name}': {e}",
                extra={"resource": resource.name},
            )
            envelope = fallback_envelope(resource, e.public_message, {})
            envelope["message"] = "Failed to submit form"
            return self._json(envelope)

        record = {"id": self.id_generator.next_id()}
        record.update({k: v for k, v in body.items() if k not in ("id", "created_at")})
        record["created_at"] = utc_timestamp()
        logger.info(
            f"Accepted submission for resource '{resource.name}'",
            extra={"resource": resource.name, "submission_id": record["id"]},
        )
        return self._json(
            Envelope(success=True, message="Form submitted successfully", data=record)
        )

    async def _search(self, resource: ResourceSpec, request: Request) -> JSONResponse:
        result = await self.search_service.search(resource, request.query_params.get("q", ""))
        cache_seconds = resource.cache_seconds if result.success and result.query else 0
        return self._json(result.to_content(), cache_seconds=cache_seconds)

    async def _read_json_body(self, request: Request) -> Any:
        try:
            return await request.json()
        except ValueError as e:
            raise InvalidRequestBodyError(f"Request body is not valid JSON: {e}") from e

    def _json(self, content: Any, cache_seconds: int = 0) -> JSONResponse:
        if isinstance(content, Envelope):
            content = content.to_content()
        return JSONResponse(
            status_code=200,
            content=content,
            headers=response_headers(cache_seconds, self.stale_seconds),
        )
