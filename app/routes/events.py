import json

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from .. import models
from ..db import get_db
from ..settings import get_settings

router = APIRouter(prefix="/events", tags=["events"])
settings = get_settings()


def record_event(db: Session, action: models.ActionEnum, profile_key: str | None, payload: dict):
    evt = models.Event(
        profile_key=profile_key,
        action=action,
        actor_type="SYSTEM",
        payload=json.dumps(payload, ensure_ascii=False, default=str),
        app_version=settings.APP_VERSION,
        catalog_version=settings.CATALOG_VERSION,
    )
    db.add(evt)
    db.commit()


@router.get("/recent")
def recent_events(limit: int = 50, db: Session = Depends(get_db)):
    limit = max(1, min(limit, 200))
    rows = (
        db.query(models.Event)
          .order_by(models.Event.id.desc())
          .limit(limit)
          .all()
    )
    return [
        {
            "id": r.id,
            "profile_key": r.profile_key,
            "action": (r.action.value if hasattr(r.action, "value") else str(r.action)),
            "actor_type": r.actor_type,
            "payload": json.loads(r.payload or "{}"),
            "created_at": r.created_at,
        }
        for r in rows
    ]
