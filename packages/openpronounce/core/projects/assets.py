"""Asset selection within a project directory listing."""

from __future__ import annotations

from collections.abc import Sequence

from openpronounce.core.content.models import DirectoryEntry

AUDIO_SUFFIX = ".mp3"
DESCRIPTION_FILE = "description.txt"
ICON_FILE = "icon.png"


def _files(entries: Sequence[DirectoryEntry]) -> list[DirectoryEntry]:
    return [e for e in entries if e.is_file]


def select_audio(directory_name: str, entries: Sequence[DirectoryEntry]) -> DirectoryEntry | None:
    """Pick the pronunciation recording for a project.

    ``<directory_name>.mp3`` wins; otherwise the first file ending in
    ``.mp3`` (any case); otherwise None.
    """
    files = _files(entries)
    wanted = f"{directory_name}{AUDIO_SUFFIX}"

    for entry in files:
        if entry.name == wanted:
            return entry
    for entry in files:
        if entry.name.lower().endswith(AUDIO_SUFFIX):
            return entry
    return None


def select_description(entries: Sequence[DirectoryEntry]) -> DirectoryEntry | None:
    return next((e for e in _files(entries) if e.name == DESCRIPTION_FILE), None)


def select_icon(entries: Sequence[DirectoryEntry]) -> DirectoryEntry | None:
    return next((e for e in _files(entries) if e.name == ICON_FILE), None)
