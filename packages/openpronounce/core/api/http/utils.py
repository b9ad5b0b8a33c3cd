"""Small helpers for AsyncApiClient."""

from __future__ import annotations

from collections.abc import Mapping
from urllib.parse import urljoin

_REQUEST_ID_HEADERS = ("x-github-request-id", "x-request-id", "request-id")


def join_url(base_url: str, path: str) -> str:
    """Resolve ``path`` against ``base_url``; absolute URLs come back unchanged.

    Listing entries carry absolute ``url``/``download_url`` values that must
    be requested as they are.

    Example:
        >>> join_url("https://api.github.com", "/repos/o/r/contents/projects")
        'https://api.github.com/repos/o/r/contents/projects'
    """
    if path.startswith(("http://", "https://")):
        return path
    return urljoin(base_url.rstrip("/") + "/", path.lstrip("/"))


def safe_snippet(content: bytes | None, limit: int) -> str:
    """First ``limit`` bytes of a body as text, bad UTF-8 replaced."""
    return (content or b"")[:limit].decode("utf-8", errors="replace")


def get_request_id(headers: Mapping[str, str]) -> str | None:
    """Tracing id from response headers, GitHub's own header first."""
    lowered = {k.lower(): v for k, v in headers.items()}
    for name in _REQUEST_ID_HEADERS:
        if name in lowered:
            return lowered[name]
    return None
