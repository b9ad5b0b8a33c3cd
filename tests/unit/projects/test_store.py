"""Tests for SnapshotStore."""

from __future__ import annotations

from openpronounce.core.projects.models import Project, Snapshot
from openpronounce.core.projects.store import SnapshotStore


class TestSnapshotStore:
    """Tests for SnapshotStore."""

    def test_starts_empty(self) -> None:
        store = SnapshotStore()
        assert store.current() is None
        assert store.version == 0

    def test_publish_replaces_whole_snapshot(self) -> None:
        store = SnapshotStore()
        first = Snapshot.build([Project(name="Apple")])
        second = Snapshot.build([Project(name="Banana"), Project(name="Cherry")])

        store.publish(first)
        assert store.current() is first

        store.publish(second)
        assert store.current() is second
        assert store.version == 2
