# app/routes/schemes.py
from fastapi import APIRouter, HTTPException

from .. import schemas
from app.engine.catalog import load_catalog, get_scheme, catalog_options

router = APIRouter(prefix="/schemes", tags=["schemes"])


@router.get("/", response_model=list[schemas.Scheme])
def list_schemes():
    return list(load_catalog())


@router.get("/options", response_model=schemas.OptionsResponse)
def options():
    """Option lists for rendering the profile form."""
    return catalog_options()


@router.get("/{scheme_id}", response_model=schemas.Scheme)
def read_scheme(scheme_id: str):
    scheme = get_scheme(scheme_id)
    if scheme is None:
        raise HTTPException(404, "Scheme not found")
    return scheme
