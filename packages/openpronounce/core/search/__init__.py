"""Fuzzy search over project snapshots."""

from openpronounce.core.search.index import ScoredCandidate, SearchIndex, rank, score_candidates
from openpronounce.core.search.scoring import (
    NON_MATCHING,
    NonMatching,
    Score,
    combine_scores,
    fuzzy_score,
    is_match,
    normalize,
)

__all__ = [
    "NON_MATCHING",
    "NonMatching",
    "Score",
    "ScoredCandidate",
    "SearchIndex",
    "combine_scores",
    "fuzzy_score",
    "is_match",
    "normalize",
    "rank",
    "score_candidates",
]
