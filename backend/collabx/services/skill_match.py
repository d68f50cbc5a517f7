"""
Skill match estimation between a project's requirements and a candidate.
"""

from __future__ import annotations

import math
from typing import Iterable

HIGH_MATCH_THRESHOLD = 70
MEDIUM_MATCH_THRESHOLD = 40


def _normalize(skills: Iterable[str] | None) -> set[str]:
    if not skills:
        return set()
    return {s.strip().casefold() for s in skills if s and s.strip()}


def match_score(required_skills: Iterable[str] | None, candidate_skills: Iterable[str] | None) -> int:
    """
    Percentage (0..100) of required skills the candidate declares.

    Comparison is case-insensitive and both sides are treated as sets, so
    repeating a skill never counts twice. A project with no requirements is a
    full match. Halves round up.
    """
    required = _normalize(required_skills)
    if not required:
        return 100
    matches = len(required & _normalize(candidate_skills))
    return int(math.floor(matches * 100 / len(required) + 0.5))


def match_band(score: int) -> str:
    if score >= HIGH_MATCH_THRESHOLD:
        return "high"
    if score >= MEDIUM_MATCH_THRESHOLD:
        return "medium"
    return "low"
