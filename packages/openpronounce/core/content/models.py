"""Content source listing models."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class EntryKind(str, Enum):
    """Kind of a listing entry.

    Values:
        FILE: Regular file
        DIRECTORY: Sub-container that can be listed again
        OTHER: Symlink, submodule or anything else (never selected)
    """

    FILE = "file"
    DIRECTORY = "directory"
    OTHER = "other"


_GITHUB_KINDS = {"file": EntryKind.FILE, "dir": EntryKind.DIRECTORY}


class DirectoryEntry(BaseModel):
    """One item of a directory listing.

    Attributes:
        name: Entry name (last path segment)
        kind: File, directory or other
        location: Handle for re-listing or re-reading (the API URL)
        public_url: Human-facing page for the entry
        download_url: Raw content URL (files only)
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1)
    kind: EntryKind
    location: str | None = None
    public_url: str | None = None
    download_url: str | None = None

    @property
    def is_file(self) -> bool:
        return self.kind is EntryKind.FILE

    @property
    def is_directory(self) -> bool:
        return self.kind is EntryKind.DIRECTORY

    @classmethod
    def from_github(cls, item: dict[str, Any]) -> DirectoryEntry:
        """Build an entry from a GitHub contents API item.

        Raises:
            ValidationError: If the item has no usable name
        """
        return cls(
            name=item.get("name") or "",
            kind=_GITHUB_KINDS.get(item.get("type") or "", EntryKind.OTHER),
            location=item.get("url"),
            public_url=item.get("html_url"),
            download_url=item.get("download_url"),
        )
