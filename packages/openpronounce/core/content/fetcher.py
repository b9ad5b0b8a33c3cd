"""Remote reads against the content source.

Two operations: structured directory listings and raw text reads. Transport
failures and non-success responses surface as typed ApiError subclasses;
nothing here retries or turns an error into an empty result.
"""

from __future__ import annotations

import logging
from typing import Protocol
from urllib.parse import quote, urlencode

from pydantic import ValidationError

from openpronounce.core.api.http import AsyncApiClient
from openpronounce.core.config.models import ContentSourceConfig
from openpronounce.core.config.repo import resolve_repo_spec
from openpronounce.core.content.models import DirectoryEntry

logger = logging.getLogger(__name__)

GITHUB_JSON = "application/vnd.github+json"


class ContentFetcher(Protocol):
    """Protocol for content source reads."""

    async def list_directory(self, path: str) -> list[DirectoryEntry]:
        """List a container.

        Args:
            path: Path relative to the content root, or an entry's location URL

        Returns:
            Entries in listing order

        Raises:
            ConfigurationError: If the content source cannot be determined
            NetworkError: On transport failure
            RemoteError: On non-success response
        """
        ...

    async def read_text(self, url: str) -> str:
        """Read raw text content.

        Raises:
            NetworkError: On transport failure
            RemoteError: On non-success response
        """
        ...


class GitHubContentsFetcher:
    """ContentFetcher backed by the GitHub repository contents API.

    Args:
        http_client: Async HTTP client
        content: Content source configuration (repo, branch, API base)

    Example:
        >>> fetcher = GitHubContentsFetcher(http_client=http, content=ContentSourceConfig())
        >>> entries = await fetcher.list_directory("projects")
        >>> [e.name for e in entries if e.is_directory]
        ['Apple', 'Banana']
    """

    def __init__(self, http_client: AsyncApiClient, content: ContentSourceConfig):
        self.http_client = http_client
        self.content = content

    def contents_url(self, path: str) -> str:
        """Build the contents API URL for a repository path.

        Raises:
            ConfigurationError: If owner/repo cannot be resolved
        """
        spec = resolve_repo_spec(self.content)
        base = self.content.api_base_url.rstrip("/")
        rel = quote(path.strip("/"), safe="/")
        query = urlencode({"ref": self.content.branch})
        return f"{base}/repos/{spec.owner}/{spec.repo}/contents/{rel}?{query}"

    async def list_directory(self, path: str) -> list[DirectoryEntry]:
        if path.startswith(("http://", "https://")):
            url = path
        else:
            url = self.contents_url(path)

        response = await self.http_client.get(url, headers={"Accept": GITHUB_JSON})
        payload = self.http_client.json(response)

        if not isinstance(payload, list):
            logger.warning(f"Listing for {url} is not a directory, treating as empty")
            return []

        entries: list[DirectoryEntry] = []
        for item in payload:
            if not isinstance(item, dict):
                logger.warning(f"Skipping non-object listing item in {url}")
                continue
            try:
                entries.append(DirectoryEntry.from_github(item))
            except ValidationError as e:
                logger.warning(f"Skipping malformed listing item in {url}: {e}")

        logger.debug(f"Listed {len(entries)} entries from {url}")
        return entries

    async def read_text(self, url: str) -> str:
        response = await self.http_client.get(url, headers={"Cache-Control": "no-cache"})
        return response.text
