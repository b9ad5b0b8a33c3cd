"""Single-attempt async HTTP client used for GitHub reads."""

from openpronounce.core.api.http.client import AsyncApiClient
from openpronounce.core.api.http.config import HttpClientConfig
from openpronounce.core.api.http.errors import (
    ApiError,
    AuthError,
    ClientError,
    DecodeError,
    NetworkError,
    RateLimitError,
    RemoteError,
    ServerError,
    TimeoutError,
    UnexpectedStatusError,
)

__all__ = [
    "ApiError",
    "AsyncApiClient",
    "AuthError",
    "ClientError",
    "DecodeError",
    "HttpClientConfig",
    "NetworkError",
    "RateLimitError",
    "RemoteError",
    "ServerError",
    "TimeoutError",
    "UnexpectedStatusError",
]
