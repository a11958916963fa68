# app/routes/profiles.py
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from pydantic import ValidationError
from sqlalchemy.orm import Session

from .. import models, schemas
from ..db import get_db
from ..logging_config import log_event, log_failure
from ..settings import get_settings
from .events import record_event
from .match import run_match

from app.engine.normalize import DEFAULT_PROFILE, UnknownProfileField, merge_profile, profile_from_form

router = APIRouter(prefix="/profiles", tags=["profiles"])
settings = get_settings()


def _load(db: Session, key: str) -> models.SavedProfile | None:
    return db.query(models.SavedProfile).filter(models.SavedProfile.key == key).first()


def _store(db: Session, key: str, profile: schemas.Profile) -> schemas.SavedProfileResponse:
    row = _load(db, key)
    payload = profile.model_dump(mode="json")
    if row is None:
        row = models.SavedProfile(key=key, payload=payload)
        db.add(row)
    else:
        row.payload = payload
    db.commit()
    return schemas.SavedProfileResponse(key=key, profile=profile)


def _profile_of(row: models.SavedProfile) -> schemas.Profile:
    # Stored payloads round-trip through the same typed Profile shape.
    try:
        return schemas.Profile.model_validate(row.payload or {})
    except ValidationError as e:
        log_failure("PROFILE_PAYLOAD_INVALID", {"profile_key": row.key, "errors": e.errors()})
        return DEFAULT_PROFILE


@router.get("/{key}", response_model=schemas.SavedProfileResponse)
def get_profile(key: str, db: Session = Depends(get_db)):
    row = _load(db, key)
    if row is None:
        raise HTTPException(404, "Profile not found")
    return schemas.SavedProfileResponse(key=key, profile=_profile_of(row))


@router.put("/{key}", response_model=schemas.SavedProfileResponse)
def save_profile(key: str, form: schemas.ProfileForm, db: Session = Depends(get_db)):
    profile = profile_from_form(form)
    out = _store(db, key, profile)
    record_event(db, models.ActionEnum.SAVE_PROFILE, key, {"fields": sorted(form.model_fields_set)})
    log_event("SAVE_PROFILE", "profile saved", {"profile_key": key})
    return out


@router.patch("/{key}", response_model=schemas.SavedProfileResponse)
def update_profile(
    key: str,
    fields: dict[str, Any] = Body(..., description="Raw form fields to change"),
    db: Session = Depends(get_db),
):
    row = _load(db, key)
    current = _profile_of(row) if row is not None else DEFAULT_PROFILE
    try:
        profile = merge_profile(current, fields)
    except UnknownProfileField as e:
        raise HTTPException(422, f"Unknown profile field: {e.args[0]}")

    out = _store(db, key, profile)
    record_event(db, models.ActionEnum.UPDATE_PROFILE, key, {"fields": sorted(fields)})
    return out


@router.delete("/{key}", response_model=schemas.SavedProfileResponse)
def reset_profile(key: str, db: Session = Depends(get_db)):
    out = _store(db, key, DEFAULT_PROFILE)
    record_event(db, models.ActionEnum.RESET_PROFILE, key, {})
    log_event("RESET_PROFILE", "profile reset to defaults", {"profile_key": key})
    return out


@router.get("/{key}/matches", response_model=schemas.MatchResponse)
def profile_matches(
    key: str,
    limit: int | None = Query(None, ge=1, le=settings.MAX_PAGE_SIZE),
    db: Session = Depends(get_db),
):
    row = _load(db, key)
    if row is None:
        raise HTTPException(404, "Profile not found")
    limit = settings.DEFAULT_PAGE_SIZE if limit is None else limit
    return run_match(db, _profile_of(row), limit, profile_key=key)
