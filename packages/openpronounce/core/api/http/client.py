"""Async HTTP client on top of httpx.AsyncClient.

Each call makes exactly one attempt. Anything other than a 2xx answer is
raised as a RemoteError subclass, and transport failures become NetworkError,
so a caller can never mistake a failed read for an empty one.
"""

from __future__ import annotations

import time
import uuid
from collections.abc import Mapping
from typing import Any

import httpx

from openpronounce.core.api.http.config import HttpClientConfig
from openpronounce.core.api.http.errors import (
    ApiError,
    AuthError,
    ClientError,
    DecodeError,
    NetworkError,
    RateLimitError,
    ServerError,
    TimeoutError,
    UnexpectedStatusError,
)
from openpronounce.core.api.http.logging_utils import RequestLogContext, log_request, log_response
from openpronounce.core.api.http.utils import get_request_id, join_url, safe_snippet


def _new_request_id() -> str:
    return f"req_{uuid.uuid4().hex[:12]}"


def _error_class_for(status_code: int) -> type[ApiError]:
    """RemoteError subclass for a non-2xx status."""
    if status_code in (401, 403):
        return AuthError
    if status_code == 429:
        return RateLimitError
    if 400 <= status_code < 500:
        return ClientError
    if status_code >= 500:
        return ServerError
    # 1xx and 3xx that httpx did not resolve (304, redirect without Location)
    return UnexpectedStatusError


class AsyncApiClient:
    """Single-attempt async client with typed errors and request logging.

    Args:
        config: Client configuration
        transport: Custom transport; tests pass httpx.MockTransport

    Example:
        >>> async with AsyncApiClient(HttpClientConfig(base_url="https://api.github.com")) as c:
        ...     listing = c.json(await c.get("/repos/platypython/openPronounce/contents/projects"))
    """

    def __init__(
        self,
        config: HttpClientConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self._client = httpx.AsyncClient(
            base_url=config.base_url,
            headers={"User-Agent": config.user_agent, **config.headers},
            timeout=config.timeout,
            follow_redirects=True,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> AsyncApiClient:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    def _merge_headers(self, headers: Mapping[str, str] | None) -> httpx.Headers:
        # httpx.Headers compares names case-insensitively, so a caller's
        # "Accept" replaces the client default instead of joining it.
        merged = httpx.Headers(self._client.headers)
        merged.update(headers or {})
        if "X-Request-Id" not in merged:
            merged["X-Request-Id"] = _new_request_id()
        return merged

    def _error(
        self,
        error_class: type[ApiError],
        message: str,
        method: str,
        url: str,
        *,
        request_id: str | None = None,
        response: httpx.Response | None = None,
        cause: BaseException | None = None,
    ) -> ApiError:
        headers = None
        snippet = None
        status_code = None
        if response is not None:
            status_code = response.status_code
            headers = dict(response.headers)
            snippet = safe_snippet(response.content, self.config.max_response_body_for_error)
            request_id = get_request_id(response.headers) or request_id
        return error_class(
            message=message,
            method=method,
            url=url,
            status_code=status_code,
            request_id=request_id,
            response_headers=headers,
            response_body_snippet=snippet,
            cause=cause,
        )

    async def request(
        self,
        method: str,
        path: str,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> httpx.Response:
        """Send one request and return the response if it is a 2xx.

        Args:
            method: HTTP method
            path: Path relative to base_url, or an absolute URL
            headers: Headers added to (or replacing) the client defaults

        Raises:
            NetworkError: Transport failure (TimeoutError on timeout)
            RemoteError: Any non-2xx status, as a categorized subclass
        """
        method = method.upper()
        url = join_url(str(self._client.base_url), path)
        merged = self._merge_headers(headers)
        request_id = merged["X-Request-Id"]

        ctx = RequestLogContext(method=method, url=url, request_id=request_id)
        started = log_request(ctx, merged, self.config.redact_headers)

        try:
            response = await self._client.request(method, url, headers=merged)
        except httpx.TimeoutException as e:
            raise self._error(
                TimeoutError, "Request timed out", method, url, request_id=request_id, cause=e
            ) from e
        except httpx.RequestError as e:
            raise self._error(
                NetworkError, f"Network error: {e}", method, url, request_id=request_id, cause=e
            ) from e

        log_response(ctx, response.status_code, time.perf_counter() - started)

        if not response.is_success:
            raise self._error(
                _error_class_for(response.status_code),
                "HTTP error response",
                method,
                url,
                request_id=request_id,
                response=response,
            )
        return response

    async def get(self, path: str, **kwargs: Any) -> httpx.Response:
        return await self.request("GET", path, **kwargs)

    def json(self, response: httpx.Response) -> Any:
        """Decode a JSON body.

        Returns None for an empty body.

        Raises:
            DecodeError: Wrong content type or unparseable JSON
        """
        if not response.content:
            return None

        method = response.request.method
        url = str(response.request.url)
        ctype = response.headers.get("content-type", "")
        if "application/json" not in ctype and "+json" not in ctype:
            raise self._error(
                DecodeError,
                f"Response is not JSON (content-type mismatch: {ctype or 'none'})",
                method,
                url,
                response=response,
            )
        try:
            return response.json()
        except ValueError as e:
            raise self._error(
                DecodeError, "Malformed JSON response", method, url, response=response, cause=e
            ) from e
