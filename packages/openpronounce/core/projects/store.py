"""Owner of the current project snapshot."""

from __future__ import annotations

import logging

from openpronounce.core.projects.models import Snapshot

logger = logging.getLogger(__name__)


class SnapshotStore:
    """Holds the snapshot that search and rendering read from.

    The aggregation pipeline is the only writer and replaces the whole
    snapshot in one assignment, so readers see either the previous snapshot
    or the new one, never a partial one.

    Example:
        >>> store = SnapshotStore()
        >>> store.current() is None
        True
        >>> store.publish(Snapshot.build([Project(name="Apple")]))
        >>> store.current().names()
        ['Apple']
    """

    def __init__(self) -> None:
        self._snapshot: Snapshot | None = None
        self._version = 0

    def publish(self, snapshot: Snapshot) -> None:
        """Replace the current snapshot."""
        self._snapshot = snapshot
        self._version += 1
        logger.debug(f"Published snapshot v{self._version} ({len(snapshot)} projects)")

    def current(self) -> Snapshot | None:
        """Return the current snapshot, or None before the first publish."""
        return self._snapshot

    @property
    def version(self) -> int:
        """Number of snapshots published so far."""
        return self._version
