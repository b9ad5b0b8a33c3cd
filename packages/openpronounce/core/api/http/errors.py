"""Error types raised by AsyncApiClient.

    ApiError
    ├── NetworkError          no usable response (DNS, reset, ...)
    │   └── TimeoutError
    ├── RemoteError           the server answered with a non-2xx status
    │   ├── AuthError         401 / 403
    │   ├── RateLimitError    429
    │   ├── ClientError       other 4xx
    │   ├── ServerError       5xx
    │   └── UnexpectedStatusError  1xx / 3xx left over after redirects
    └── DecodeError           body is not the JSON we asked for
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ApiErrorData(BaseModel):
    """Diagnostic fields shared by every ApiError."""

    model_config = {"arbitrary_types_allowed": True}

    message: str
    method: str
    url: str
    status_code: int | None = None
    request_id: str | None = None
    response_headers: dict[str, str] | None = None
    response_body_snippet: str | None = None
    cause: BaseException | None = Field(default=None, repr=False)


class ApiError(Exception):
    """Base class; the fields of ``data`` are also exposed as attributes."""

    def __init__(self, **fields: Any) -> None:
        self.data = ApiErrorData(**fields)
        for name in ApiErrorData.model_fields:
            setattr(self, name, getattr(self.data, name))
        super().__init__(str(self))

    def __str__(self) -> str:
        d = self.data
        text = f"{d.message} ({d.method} {d.url}"
        if d.status_code is not None:
            text += f", status={d.status_code}"
        if d.request_id:
            text += f", request_id={d.request_id}"
        text += ")"
        if d.response_body_snippet:
            text += f": {d.response_body_snippet[:200]}"
        return text


class NetworkError(ApiError):
    pass


class TimeoutError(NetworkError):
    pass


class RemoteError(ApiError):
    pass


class RateLimitError(RemoteError):
    pass


class AuthError(RemoteError):
    pass


class ClientError(RemoteError):
    pass


class ServerError(RemoteError):
    pass


class UnexpectedStatusError(RemoteError):
    pass


class DecodeError(ApiError):
    pass
