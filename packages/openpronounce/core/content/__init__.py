"""Content source access: directory listings and raw text reads."""

from openpronounce.core.content.fetcher import ContentFetcher, GitHubContentsFetcher
from openpronounce.core.content.models import DirectoryEntry, EntryKind

__all__ = [
    "ContentFetcher",
    "DirectoryEntry",
    "EntryKind",
    "GitHubContentsFetcher",
]
