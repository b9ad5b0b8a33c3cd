"""OpenPronounce session coordinator.

The session owns the shared services one front end needs:
- HTTP client for the content source
- Content fetcher
- Snapshot store (the single owner of the current snapshot)
- Aggregation pipeline and search index over that store
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any

import httpx

from openpronounce.core.api.http import AsyncApiClient, HttpClientConfig
from openpronounce.core.config.loader import load_app_config
from openpronounce.core.config.models import AppConfig
from openpronounce.core.config.repo import repo_url
from openpronounce.core.content.fetcher import ContentFetcher, GitHubContentsFetcher
from openpronounce.core.projects.aggregation import AggregationPipeline
from openpronounce.core.projects.models import Project, Snapshot
from openpronounce.core.projects.store import SnapshotStore
from openpronounce.core.search.index import SearchIndex

logger = logging.getLogger(__name__)


class OpenPronounceSession:
    """Loads projects from the content source and answers searches.

    Use as an async context manager so the HTTP client is closed.

    Args:
        app_config: AppConfig instance, path to a config file, or None
            (default file if present, then environment overrides)
        fetcher: Content fetcher to use instead of the GitHub one
        transport: Optional HTTP transport for the default fetcher

    Example:
        >>> async with OpenPronounceSession() as session:
        ...     await session.refresh()
        ...     [p.name for p in session.search("ap")]
        ['Apple', 'apricot']
    """

    def __init__(
        self,
        app_config: AppConfig | Path | str | None = None,
        *,
        fetcher: ContentFetcher | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.app_config = self._resolve_config(app_config)
        self._http: AsyncApiClient | None = None

        if fetcher is None:
            self._http = AsyncApiClient(self._http_config(), transport=transport)
            fetcher = GitHubContentsFetcher(self._http, self.app_config.content)

        self.fetcher = fetcher
        self.store = SnapshotStore()
        self.pipeline = AggregationPipeline(self.fetcher, self.app_config, store=self.store)
        self.index = SearchIndex(self.store)

        logger.debug(f"Session initialized for {self.repo_url}")

    @staticmethod
    def _resolve_config(value: Any) -> AppConfig:
        if value is None:
            return load_app_config()
        if isinstance(value, (Path, str)):
            return load_app_config(value)
        if isinstance(value, AppConfig):
            return value
        raise TypeError(f"Expected AppConfig, Path, str, or None; got {type(value).__name__}")

    def _http_config(self) -> HttpClientConfig:
        http = self.app_config.http
        return HttpClientConfig(
            base_url=self.app_config.content.api_base_url,
            timeout=httpx.Timeout(http.timeout_s, connect=http.connect_timeout_s),
            user_agent=http.user_agent,
        )

    @property
    def repo_url(self) -> str:
        """Public page of the configured content repository."""
        return repo_url(self.app_config.content)

    async def refresh(self, cancel_token: asyncio.Event | None = None) -> Snapshot:
        """Run one aggregation and publish the result.

        Raises:
            PipelineError: If no snapshot could be produced; the previously
                published snapshot stays current
        """
        return await self.pipeline.discover_and_resolve(cancel_token=cancel_token)

    def current(self) -> Snapshot | None:
        return self.store.current()

    def search(self, query: str) -> list[Project]:
        return self.index.search(query)

    async def aclose(self) -> None:
        if self._http is not None:
            await self._http.aclose()

    async def __aenter__(self) -> OpenPronounceSession:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
