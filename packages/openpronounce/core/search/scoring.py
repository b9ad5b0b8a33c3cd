"""Fuzzy subsequence scoring.

A query matches a candidate when all query characters appear in the candidate
in order (case-insensitive, contiguity not required). Matches are scored so
that consecutive runs, prefixes and exact matches rank higher; anything else
gets the NON_MATCHING sentinel, which is not a number and never takes part in
arithmetic or ordering.

Example:
    >>> fuzzy_score("ap", "Apple")
    56
    >>> fuzzy_score("ap", "Banana")
    <NonMatching.NON_MATCHING>
"""

from __future__ import annotations

from enum import Enum

STEP_BASE = 10
STREAK_WEIGHT = 2
MISS_PENALTY = 1
PREFIX_BONUS = 30
EXACT_BONUS = 50


class NonMatching(Enum):
    """Sentinel type for "excluded from results"."""

    NON_MATCHING = "non_matching"

    def __repr__(self) -> str:
        return "<NonMatching.NON_MATCHING>"


NON_MATCHING = NonMatching.NON_MATCHING

Score = int | NonMatching


def normalize(text: str | None) -> str:
    """Trim and lowercase; None becomes the empty string."""
    return (text or "").strip().lower()


def fuzzy_score(query: str | None, candidate: str | None) -> Score:
    """Score how well ``query`` matches ``candidate``.

    Args:
        query: Search text
        candidate: Text to match against

    Returns:
        0 for an empty query, an int (higher is better) for a subsequence
        match, NON_MATCHING otherwise
    """
    q = normalize(query)
    target = normalize(candidate)
    if not q:
        return 0
    if not target:
        return NON_MATCHING

    qi = 0
    score = 0
    streak = 0

    for ch in target:
        if ch == q[qi]:
            qi += 1
            streak += 1
            score += STEP_BASE + STREAK_WEIGHT * streak
            if qi == len(q):
                break
        else:
            streak = 0
            score -= MISS_PENALTY

    if qi < len(q):
        return NON_MATCHING

    if target.startswith(q):
        score += PREFIX_BONUS
    if target == q:
        score += EXACT_BONUS

    return score


def is_match(score: Score) -> bool:
    """True when ``score`` is a number rather than NON_MATCHING."""
    return score is not NON_MATCHING


def combine_scores(*scores: Score) -> Score:
    """Sum scores; any NON_MATCHING operand makes the result NON_MATCHING."""
    total = 0
    for score in scores:
        if score is NON_MATCHING:
            return NON_MATCHING
        total += score
    return total
