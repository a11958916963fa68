# app/routes/match.py
from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from .. import models, schemas
from ..db import get_db
from ..logging_config import log_match
from ..settings import get_settings
from .events import record_event

from app.engine.display import scheme_card
from app.engine.normalize import profile_from_form
from app.engine.ranking import MatchSummary, match_schemes

router = APIRouter(prefix="/match", tags=["match"])
settings = get_settings()


def build_match_response(summary: MatchSummary, limit: int) -> schemas.MatchResponse:
    shown = summary.results[:limit]
    return schemas.MatchResponse(
        eligible_count=summary.eligible_count,
        total_count=summary.total_count,
        shown_count=len(shown),
        results=[schemas.SchemeCard(**scheme_card(r)) for r in shown],
    )


def run_match(
    db: Session,
    profile: schemas.Profile,
    limit: int,
    profile_key: str | None = None,
) -> schemas.MatchResponse:
    summary = match_schemes(profile)
    stats = {
        "results": len(summary.results),
        "eligible_count": summary.eligible_count,
        "total_count": summary.total_count,
        "eligible_only": profile.eligible_only,
    }
    record_event(db, models.ActionEnum.MATCH_QUERY, profile_key, stats)
    out = build_match_response(summary, limit)
    log_match(profile_key, out.shown_count, summary.eligible_count, summary.total_count)
    return out


def _limit(limit: int | None) -> int:
    return settings.DEFAULT_PAGE_SIZE if limit is None else limit


@router.post("/", response_model=schemas.MatchResponse)
def match_form(
    form: schemas.ProfileForm,
    response: Response,
    limit: int | None = Query(None, ge=1, le=settings.MAX_PAGE_SIZE),
    db: Session = Depends(get_db),
):
    """Rank the catalog for raw form input (numbers may arrive as text)."""
    response.headers["X-Catalog-Version"] = settings.CATALOG_VERSION
    return run_match(db, profile_from_form(form), _limit(limit))


@router.post("/typed", response_model=schemas.MatchResponse)
def match_typed(
    profile: schemas.Profile,
    response: Response,
    limit: int | None = Query(None, ge=1, le=settings.MAX_PAGE_SIZE),
    db: Session = Depends(get_db),
):
    response.headers["X-Catalog-Version"] = settings.CATALOG_VERSION
    return run_match(db, profile, _limit(limit))
