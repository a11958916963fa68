# app/engine/display.py
"""Presentation helpers for result cards. The engine itself never caps or truncates."""
from __future__ import annotations

from typing import Optional

from .rules import MatchResult

MAX_PERCENT = 100
CARD_TAG_LIMIT = 5


def match_percent(score: int) -> int:
    return min(score, MAX_PERCENT)


def format_inr(amount: float) -> str:
    """Indian digit grouping, no decimals: 250000 -> '₹2,50,000'."""
    n = int(round(abs(amount)))
    sign = "-" if amount < 0 and n else ""
    digits = str(n)
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return f"{sign}₹{','.join(groups + [tail])}"


def match_label(eligible: bool) -> str:
    return "Eligible" if eligible else "Check"


def deadline_label(deadline: Optional[str]) -> str:
    return deadline or "Rolling"


def scheme_card(result: MatchResult) -> dict:
    scheme = result.scheme
    return {
        "id": scheme.id,
        "name": scheme.name,
        "ministry": scheme.ministry,
        "scheme_type": scheme.scheme_type,
        "amount": f"{format_inr(scheme.amount.value)}/{scheme.amount.frequency}",
        "deadline": deadline_label(scheme.deadline),
        "tags": list(scheme.tags[:CARD_TAG_LIMIT]),
        "source": scheme.source,
        "website": scheme.website,
        "score": result.score,
        "match_percent": match_percent(result.score),
        "eligible": result.eligible,
        "match_label": match_label(result.eligible),
        "reasons": list(result.reasons),
    }
