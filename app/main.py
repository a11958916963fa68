# app/main.py
from fastapi import FastAPI
from contextlib import asynccontextmanager

from .db import Base, engine
from . import models  # noqa: F401  (registers tables on Base.metadata)
from .errors import install_error_handlers
from .logging_config import log_event
from .settings import get_settings
from .routes import events, match, profiles, schemes

from app.engine.catalog import load_catalog

settings = get_settings()


def _ensure_db_ready() -> None:
    Base.metadata.create_all(bind=engine)


# Run schema init at import time so pytest cannot bypass it
_ensure_db_ready()


@asynccontextmanager
async def lifespan(app: FastAPI):
    _ensure_db_ready()
    catalog = load_catalog()
    log_event("STARTUP", "catalog ready", {"schemes": len(catalog), "catalog_version": settings.CATALOG_VERSION})
    yield


app = FastAPI(title="SchemeFinder API", version=settings.APP_VERSION, lifespan=lifespan)
install_error_handlers(app)

app.include_router(schemes.router)
app.include_router(match.router)
app.include_router(profiles.router)
app.include_router(events.router)


@app.get("/")
def health():
    return {
        "status": "ok",
        "service": "schemefinder",
        "version": settings.APP_VERSION,
        "catalog_version": settings.CATALOG_VERSION,
        "schemes": len(load_catalog()),
    }
