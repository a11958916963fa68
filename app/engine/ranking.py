# app/engine/ranking.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from app.schemas import Profile, Scheme

from .catalog import load_catalog
from .normalize import search_tokens
from .rules import MatchResult, evaluate_scheme

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatchSummary:
    results: tuple[MatchResult, ...]
    eligible_count: int
    total_count: int


def match_schemes(profile: Profile, catalog: Optional[Sequence[Scheme]] = None) -> MatchSummary:
    """
    Evaluate every scheme, optionally drop the ineligible ones and order by
    score, best first. ``sorted`` is stable, so equal scores keep catalog order.
    Results are never truncated here; paging is a display concern.
    """
    if catalog is None:
        catalog = load_catalog()

    tokens = search_tokens(profile.search)
    evaluated = [evaluate_scheme(profile, scheme, tokens) for scheme in catalog]
    if profile.eligible_only:
        evaluated = [r for r in evaluated if r.eligible]

    results = tuple(sorted(evaluated, key=lambda r: -r.score))
    summary = MatchSummary(
        results=results,
        eligible_count=sum(1 for r in results if r.eligible),
        total_count=len(catalog),
    )
    logger.debug(
        "matched %d/%d schemes (eligible=%d, tokens=%d)",
        len(results), summary.total_count, summary.eligible_count, len(tokens),
    )
    return summary
