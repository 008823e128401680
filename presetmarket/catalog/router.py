"""
Route definitions for the catalog API.

Endpoints under /api:
- GET    /search             : marketplace search over presets
- GET    /presets            : all presets, newest first
- GET    /presets/{id}       : one preset
- GET    /packs              : all packs with their presets
- GET    /packs/{id}         : one pack
- DELETE /presets/{id}       : delete an owned preset
- DELETE /packs/{id}         : delete an owned pack
"""

from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..models import ErrorMessage, ItemType, Message
from ..storage import get_session
from .filters import SearchParams
from .schemas import PackOut, PresetOut
from . import store

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["catalog"],
    responses={404: {"model": ErrorMessage}, 500: {"model": ErrorMessage}},
)


def _server_error(message: str) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": message})


@router.get("/search", response_model=List[PresetOut])
def search(
    search_term: Optional[str] = Query(default=None, alias="searchTerm", description="Text in title or description"),
    genres: Optional[str] = Query(default=None, description="Comma-separated genre ids"),
    vst_types: Optional[str] = Query(default=None, alias="vstTypes", description="Comma-separated VST types"),
    preset_types: Optional[str] = Query(default=None, alias="presetTypes", description="Comma-separated preset types"),
    session: Session = Depends(get_session),
):
    """
    Search the marketplace.

    Every filter is optional; filters that are missing or empty are
    ignored, so a bare request returns the whole catalog. Results are
    ordered by creation time, newest first.
    """
    params = SearchParams.from_query(search_term, genres, vst_types, preset_types)
    try:
        presets = store.search_presets(session, params)
        return [PresetOut.model_validate(p) for p in presets]
    except SQLAlchemyError:
        logger.exception("Error fetching marketplace presets")
        return _server_error("Failed to fetch presets")


@router.get("/presets", response_model=List[PresetOut])
def list_presets(session: Session = Depends(get_session)):
    try:
        return [PresetOut.model_validate(p) for p in store.list_presets(session)]
    except SQLAlchemyError:
        logger.exception("Error fetching presets")
        return _server_error("Failed to fetch presets")


@router.get("/presets/{preset_id}", response_model=PresetOut)
def get_preset(preset_id: str, session: Session = Depends(get_session)):
    try:
        preset = store.get_preset(session, preset_id)
    except SQLAlchemyError:
        logger.exception("Error fetching preset %s", preset_id)
        return _server_error("Failed to fetch preset")
    if preset is None:
        raise HTTPException(status_code=404, detail="Preset not found")
    return PresetOut.model_validate(preset)


@router.get("/packs", response_model=List[PackOut])
def list_packs(session: Session = Depends(get_session)):
    try:
        return [PackOut.model_validate(p) for p in store.list_packs(session)]
    except SQLAlchemyError:
        logger.exception("Error fetching packs")
        return _server_error("Failed to fetch packs")


@router.get("/packs/{pack_id}", response_model=PackOut)
def get_pack(pack_id: str, session: Session = Depends(get_session)):
    try:
        pack = store.get_pack(session, pack_id)
    except SQLAlchemyError:
        logger.exception("Error fetching pack %s", pack_id)
        return _server_error("Failed to fetch pack")
    if pack is None:
        raise HTTPException(status_code=404, detail="Pack not found")
    return PackOut.model_validate(pack)


def _delete(item_type: ItemType, item_id: str, session: Session):
    try:
        deleted = store.delete_item(session, item_type, item_id)
    except SQLAlchemyError:
        session.rollback()
        logger.exception("Error deleting %s %s", item_type.value, item_id)
        return _server_error(f"Failed to delete {item_type.value}")
    if not deleted:
        raise HTTPException(status_code=404, detail=f"{item_type.label} not found")
    return Message(message=f"{item_type.label} deleted")


@router.delete("/presets/{preset_id}", response_model=Message)
def delete_preset(preset_id: str, session: Session = Depends(get_session)):
    return _delete(ItemType.PRESET, preset_id, session)


@router.delete("/packs/{pack_id}", response_model=Message)
def delete_pack(pack_id: str, session: Session = Depends(get_session)):
    return _delete(ItemType.PACK, pack_id, session)
