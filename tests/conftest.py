"""Shared pytest fixtures for openpronounce tests."""

from __future__ import annotations

import pytest

from openpronounce.core.config.models import AppConfig
from openpronounce.core.content.models import DirectoryEntry, EntryKind
from openpronounce.core.projects.models import Project
from tests.fakes import HTML_BASE, FakeFetcher, dir_entry, file_entry, raw_url

# ============================================================================
# Config Fixtures
# ============================================================================


@pytest.fixture
def app_config() -> AppConfig:
    """Default configuration (platypython/openPronounce, projects/)."""
    return AppConfig()


# ============================================================================
# Content Source Fixtures
# ============================================================================


@pytest.fixture
def fruit_fetcher() -> FakeFetcher:
    """Content source with Apple, apricot and Banana projects.

    Descriptions are chosen so that "ap" matches Apple and apricot in both
    name and description, and does not match Banana.
    """
    readme = DirectoryEntry(
        name="README.md",
        kind=EntryKind.FILE,
        location="projects/README.md",
        download_url=raw_url("", "README.md"),
    )
    return FakeFetcher(
        listings={
            "projects": [dir_entry("Banana"), dir_entry("apricot"), dir_entry("Apple"), readme],
            "projects/Apple": [
                file_entry("Apple.mp3", "Apple"),
                file_entry("description.txt", "Apple"),
                file_entry("icon.png", "Apple"),
            ],
            "projects/apricot": [
                file_entry("recording.MP3", "apricot"),
                file_entry("description.txt", "apricot"),
            ],
            "projects/Banana": [
                file_entry("Banana.mp3", "Banana"),
                file_entry("description.txt", "Banana"),
            ],
        },
        texts={
            raw_url("Apple", "description.txt"): "  A crisp apple from the orchard.\n",
            raw_url("apricot", "description.txt"): "A small stone fruit, apricot.",
            raw_url("Banana", "description.txt"): "A bright yellow banana.",
        },
    )


# ============================================================================
# Model Fixtures
# ============================================================================


@pytest.fixture
def sample_projects() -> list[Project]:
    """Resolved projects in arbitrary order."""
    return [
        Project(name="Banana", description="A bright yellow banana."),
        Project(
            name="apricot",
            description="A small stone fruit, apricot.",
            audio_asset_url=raw_url("apricot", "recording.MP3"),
        ),
        Project(
            name="Apple",
            description="A crisp apple from the orchard.",
            audio_asset_url=raw_url("Apple", "Apple.mp3"),
            icon_asset_url=raw_url("Apple", "icon.png"),
            source_url=f"{HTML_BASE}/projects/Apple",
        ),
    ]
