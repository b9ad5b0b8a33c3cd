"""Debug log lines for outgoing requests and their responses."""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping

from pydantic import BaseModel

logger = logging.getLogger("openpronounce.core.api.http")

REDACTED = "***REDACTED***"


def redact_headers(headers: Mapping[str, str], redact: tuple[str, ...]) -> dict[str, str]:
    """Copy of ``headers`` with the named ones (any case) masked."""
    masked = {name.lower() for name in redact}
    return {k: REDACTED if k.lower() in masked else v for k, v in headers.items()}


class RequestLogContext(BaseModel):
    method: str
    url: str
    request_id: str | None = None


def log_request(
    ctx: RequestLogContext, headers: Mapping[str, str], redact: tuple[str, ...]
) -> float:
    """Log the outgoing request and return a perf_counter start time."""
    logger.debug(
        f"-> {ctx.method} {ctx.url}",
        extra={**ctx.model_dump(), "headers": redact_headers(headers, redact)},
    )
    return time.perf_counter()


def log_response(ctx: RequestLogContext, status_code: int, elapsed_s: float) -> None:
    elapsed_ms = int(elapsed_s * 1000)
    logger.debug(
        f"<- {status_code} {ctx.method} {ctx.url} ({elapsed_ms}ms)",
        extra={**ctx.model_dump(), "status_code": status_code, "elapsed_ms": elapsed_ms},
    )
