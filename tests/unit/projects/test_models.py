"""Tests for Project and Snapshot models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from openpronounce.core.projects.models import Project, Snapshot, sort_by_name
from openpronounce.core.utils.formatting import collation_key


class TestProject:
    """Tests for Project."""

    def test_absent_assets_are_normal(self) -> None:
        project = Project(name="Apple")
        assert project.description == ""
        assert not project.has_audio
        assert not project.has_icon
        assert not project.has_description

    def test_name_required(self) -> None:
        with pytest.raises(ValidationError):
            Project(name="")

    def test_frozen(self) -> None:
        project = Project(name="Apple")
        with pytest.raises(ValidationError):
            project.name = "Pear"  # type: ignore[misc]


class TestSortByName:
    """Tests for sort_by_name() and collation_key()."""

    def test_case_insensitive(self) -> None:
        projects = [Project(name=n) for n in ["Banana", "apricot", "Apple"]]
        assert [p.name for p in sort_by_name(projects)] == ["Apple", "apricot", "Banana"]

    def test_accents_ignored(self) -> None:
        assert collation_key("Éclair") == collation_key("eclair") == collation_key("ECLAIR")
        projects = [Project(name=n) for n in ["Fig", "Éclair", "date"]]
        assert [p.name for p in sort_by_name(projects)] == ["date", "Éclair", "Fig"]


class TestSnapshot:
    """Tests for Snapshot."""

    def test_build_sorts(self, sample_projects: list[Project]) -> None:
        snapshot = Snapshot.build(sample_projects, warnings=["Kiwi: boom"])
        assert snapshot.names() == ["Apple", "apricot", "Banana"]
        assert snapshot.warnings == ("Kiwi: boom",)
        assert len(snapshot) == 3

    def test_duplicate_names_rejected(self) -> None:
        with pytest.raises(ValidationError, match="Duplicate project name"):
            Snapshot.build([Project(name="Apple"), Project(name="Apple")])

    def test_find(self, sample_projects: list[Project]) -> None:
        snapshot = Snapshot.build(sample_projects)
        found = snapshot.find("apricot")
        assert found is not None
        assert found.has_audio
        assert snapshot.find("Cherry") is None

    def test_empty(self) -> None:
        assert len(Snapshot()) == 0
        assert Snapshot().names() == []
