"""Search over a project snapshot.

Search is a filter, not a relevance ranker: the combined fuzzy score decides
whether a project is shown, and results are always listed in name order.
Ordering by score would change what users see and is a product decision, not
a fix.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict

from openpronounce.core.projects.models import Project, Snapshot, sort_by_name
from openpronounce.core.projects.store import SnapshotStore
from openpronounce.core.search.scoring import (
    Score,
    combine_scores,
    fuzzy_score,
    is_match,
    normalize,
)

logger = logging.getLogger(__name__)


class ScoredCandidate(BaseModel):
    """A project paired with its combined score for one query."""

    model_config = ConfigDict(frozen=True)

    project: Project
    score: Score


def _projects_of(source: Snapshot | Iterable[Project]) -> list[Project]:
    if isinstance(source, Snapshot):
        return list(source.projects)
    return list(source)


def score_candidates(query: str, projects: Iterable[Project]) -> list[ScoredCandidate]:
    """Score every project against ``query`` by name and description.

    Both parts must match for the combined score to be a number, so a
    project with an empty description never matches a non-empty query.
    """
    return [
        ScoredCandidate(
            project=p,
            score=combine_scores(fuzzy_score(query, p.name), fuzzy_score(query, p.description)),
        )
        for p in projects
    ]


def rank(query: str, source: Snapshot | Iterable[Project]) -> list[Project]:
    """Filter projects by ``query`` and return them in name order.

    Args:
        query: Free-text search input
        source: Snapshot or projects to search

    Returns:
        All projects for a blank query, otherwise the matching ones
    """
    candidates = score_candidates(query, _projects_of(source))

    if normalize(query):
        kept = [c.project for c in candidates if is_match(c.score)]
    else:
        kept = [c.project for c in candidates]

    return sort_by_name(kept)


class SearchIndex:
    """Runs queries against whatever snapshot the store currently holds.

    Args:
        store: Snapshot owner

    Example:
        >>> index = SearchIndex(store)
        >>> [p.name for p in index.search("ap")]
        ['Apple', 'apricot']
    """

    def __init__(self, store: SnapshotStore):
        self.store = store

    def search(self, query: str) -> list[Project]:
        """Rank the current snapshot; empty before anything is published."""
        snapshot = self.store.current()
        if snapshot is None:
            logger.debug("Search before first snapshot, returning no results")
            return []
        return rank(query, snapshot)
