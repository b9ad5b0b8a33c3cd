from __future__ import annotations

import httpx
from pydantic import BaseModel, Field, field_validator


class HttpClientConfig(BaseModel):
    """Settings for AsyncApiClient.

    Args:
        base_url: Root that relative request paths are joined to
        timeout: httpx timeout applied to every request
        headers: Extra default headers
        user_agent: User-Agent sent with every request
        redact_headers: Header names masked in debug logs (any case)
        max_response_body_for_error: Bytes of body kept on a RemoteError
    """

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    base_url: str
    timeout: httpx.Timeout = Field(default_factory=lambda: httpx.Timeout(10.0, connect=5.0))
    headers: dict[str, str] = Field(default_factory=dict)
    user_agent: str = "openpronounce/0.1"
    redact_headers: tuple[str, ...] = ("authorization", "cookie", "set-cookie")
    max_response_body_for_error: int = 4096

    @field_validator("base_url")
    @classmethod
    def _require_http_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"base_url must be an http:// or https:// URL, got {v!r}")
        return v
