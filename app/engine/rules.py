# app/engine/rules.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from app.options import ALL_INDIA
from app.schemas import Profile, Scheme

from .normalize import normalize_text, search_tokens

AXIS_POINTS = {
    "age": 15,
    "gender": 12,
    "caste": 12,
    "income": 14,
    "education": 12,
    "occupation": 10,
    "state": 10,
}
SEARCH_TOKEN_POINTS = 6


@dataclass(frozen=True)
class MatchResult:
    scheme: Scheme
    score: int
    eligible: bool
    reasons: tuple[str, ...] = ()  # one line per failing axis


def _haystack(scheme: Scheme) -> str:
    return normalize_text(" ".join([scheme.name, scheme.ministry, *scheme.tags]))


def evaluate_scheme(
    profile: Profile,
    scheme: Scheme,
    tokens: Optional[Sequence[str]] = None,
) -> MatchResult:
    """
    Score one scheme against one profile.

    Every axis is checked; a failing axis clears ``eligible`` but does not stop
    later axes from adding their points. An axis is skipped when either the
    scheme leaves it unconstrained or the profile leaves it unset.
    """
    crit = scheme.eligibility
    score = 0
    reasons: list[str] = []

    def check(axis: str, passed: bool, reason: str) -> None:
        nonlocal score
        if passed:
            score += AXIS_POINTS[axis]
        else:
            reasons.append(reason)

    # ---------- deterministic checks ----------
    if crit.age is not None and profile.age is not None:
        check(
            "age",
            crit.age.min <= profile.age <= crit.age.max,
            f"Age must be between {crit.age.min} and {crit.age.max}",
        )

    if crit.gender is not None and profile.gender is not None:
        check("gender", profile.gender in crit.gender, "Applicant gender not eligible")

    if crit.caste is not None and profile.caste is not None:
        check("caste", profile.caste in crit.caste, "Social category not eligible")

    if crit.income_max is not None and profile.income is not None:
        check(
            "income",
            profile.income <= crit.income_max,
            f"Income exceeds limit of {crit.income_max:,.0f}",
        )

    if crit.education is not None and profile.education is not None:
        check("education", profile.education in crit.education, "Education level not eligible")

    if crit.occupation is not None and profile.occupation is not None:
        check("occupation", profile.occupation in crit.occupation, "Occupation not eligible")

    if crit.states is not None and profile.state:
        check(
            "state",
            ALL_INDIA in crit.states or profile.state in crit.states,
            f"Not available in {profile.state}",
        )

    # ---------- filters (exclude only, no points) ----------
    if profile.scheme_type and scheme.scheme_type != profile.scheme_type:
        reasons.append(f"Scheme type is {scheme.scheme_type}")

    if tokens is None:
        tokens = search_tokens(profile.search)
    if tokens:
        haystack = _haystack(scheme)
        matches = sum(1 for t in tokens if t in haystack)
        score += matches * SEARCH_TOKEN_POINTS
        if matches == 0:
            reasons.append("No search keyword matches")

    return MatchResult(scheme=scheme, score=score, eligible=not reasons, reasons=tuple(reasons))
