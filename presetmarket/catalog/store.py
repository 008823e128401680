"""
Catalog data access.

Read helpers for presets and packs plus the delete operation used by
owners. Functions take an open ``Session`` and leave transaction
boundaries to the caller, except ``delete_item`` which commits.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.orm import Session, selectinload

from ..models import ItemType
from ..storage import CartItem, PackPreset, PresetPack, PresetUpload
from .filters import SearchParams, build_search_query

logger = logging.getLogger(__name__)


def search_presets(session: Session, params: SearchParams) -> List[PresetUpload]:
    """Run a catalog search and return matching presets, newest first."""
    rows = list(session.scalars(build_search_query(params)))
    logger.debug("search %r matched %d presets", params, len(rows))
    return rows


def list_presets(session: Session) -> List[PresetUpload]:
    return search_presets(session, SearchParams())


def get_preset(session: Session, preset_id: str) -> Optional[PresetUpload]:
    query = (
        select(PresetUpload)
        .options(
            selectinload(PresetUpload.sound_designer),
            selectinload(PresetUpload.genre),
            selectinload(PresetUpload.vst),
        )
        .where(PresetUpload.id == preset_id)
    )
    return session.scalars(query).one_or_none()


def _pack_query():
    return select(PresetPack).options(
        selectinload(PresetPack.sound_designer),
        selectinload(PresetPack.presets).selectinload(PackPreset.preset),
    )


def list_packs(session: Session) -> List[PresetPack]:
    query = _pack_query().order_by(PresetPack.created_at.desc())
    return list(session.scalars(query))


def get_pack(session: Session, pack_id: str) -> Optional[PresetPack]:
    return session.scalars(_pack_query().where(PresetPack.id == pack_id)).one_or_none()


def delete_item(session: Session, item_type: ItemType, item_id: str) -> bool:
    """Delete a preset or a pack together with the cart entries pointing at it.

    Returns ``False`` when no such item exists.
    """
    if item_type is ItemType.PRESET:
        item = session.get(PresetUpload, item_id)
        entry_column = CartItem.preset_id
    else:
        item = session.get(PresetPack, item_id)
        entry_column = CartItem.pack_id
    if item is None:
        return False

    session.execute(delete(CartItem).where(entry_column == item_id))
    if item_type is ItemType.PRESET:
        session.execute(delete(PackPreset).where(PackPreset.preset_id == item_id))
    session.delete(item)
    session.commit()
    logger.info("deleted %s %s", item_type.value, item_id)
    return True
