"""Project and snapshot models."""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field, model_validator

from openpronounce.core.utils.formatting import collation_key


class Project(BaseModel):
    """One pronunciation project, resolved from a project directory.

    Absent assets are normal: ``description`` may be empty and any URL may
    be None.

    Attributes:
        name: Directory name (non-empty, unique within a snapshot)
        description: Trimmed contents of description.txt, or ""
        audio_asset_url: Download URL of the selected mp3
        icon_asset_url: Download URL of icon.png
        source_url: Public page of the project directory
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1)
    description: str = ""
    audio_asset_url: str | None = None
    icon_asset_url: str | None = None
    source_url: str | None = None

    @property
    def has_audio(self) -> bool:
        return bool(self.audio_asset_url)

    @property
    def has_icon(self) -> bool:
        return bool(self.icon_asset_url)

    @property
    def has_description(self) -> bool:
        return bool(self.description)


def sort_by_name(projects: Iterable[Project]) -> list[Project]:
    """Order projects by name, ignoring case and accents."""
    return sorted(projects, key=lambda p: collation_key(p.name))


class Snapshot(BaseModel):
    """Complete, immutable, name-ordered set of known projects.

    Attributes:
        projects: Projects sorted by name
        warnings: Human-readable notes about directories that were skipped
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    projects: tuple[Project, ...] = ()
    warnings: tuple[str, ...] = ()

    @model_validator(mode="after")
    def _check_unique_names(self) -> Snapshot:
        seen: set[str] = set()
        for project in self.projects:
            if project.name in seen:
                raise ValueError(f"Duplicate project name in snapshot: {project.name}")
            seen.add(project.name)
        return self

    @classmethod
    def build(cls, projects: Iterable[Project], warnings: Iterable[str] = ()) -> Snapshot:
        """Create a snapshot, sorting the projects by name."""
        return cls(projects=tuple(sort_by_name(projects)), warnings=tuple(warnings))

    def __len__(self) -> int:
        return len(self.projects)

    def names(self) -> list[str]:
        return [p.name for p in self.projects]

    def find(self, name: str) -> Project | None:
        """Look up a project by exact name."""
        for project in self.projects:
            if project.name == name:
                return project
        return None
