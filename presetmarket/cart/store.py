"""
Cart and wishlist persistence.

Both collections share the ``cart_items`` table and are told apart by
the ``Cart`` row they belong to. Moving an entry rewrites its
``cart_id`` inside a single transaction, so the item is never missing
from both collections at once.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from ..models import CartType, ItemType
from ..storage import Cart, CartItem, PresetPack, PresetUpload, get_or_create_cart, utc_now

logger = logging.getLogger(__name__)


class CartError(Exception):
    """Business failure with an HTTP status for the route to report."""

    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def list_entries(session: Session, cart_type: CartType) -> List[CartItem]:
    query = (
        select(CartItem)
        .join(Cart)
        .where(Cart.type == cart_type)
        .order_by(CartItem.created_at)
    )
    return list(session.scalars(query))


def find_entry(session: Session, cart_type: CartType, item_id: str) -> Optional[CartItem]:
    query = (
        select(CartItem)
        .join(Cart)
        .where(Cart.type == cart_type)
        .where(or_(CartItem.preset_id == item_id, CartItem.pack_id == item_id))
    )
    return session.scalars(query).first()


def add_entry(
    session: Session,
    cart_type: CartType,
    preset_id: Optional[str] = None,
    pack_id: Optional[str] = None,
) -> CartItem:
    """Add a preset or a pack (exactly one) with quantity 1."""
    if bool(preset_id) == bool(pack_id):
        raise CartError("Exactly one of presetId or packId is required")

    if preset_id:
        item_type, item_id, model = ItemType.PRESET, preset_id, PresetUpload
    else:
        item_type, item_id, model = ItemType.PACK, pack_id, PresetPack
    if session.get(model, item_id) is None:
        raise CartError(f"{item_type.label} not found", status_code=404)
    if find_entry(session, cart_type, item_id) is not None:
        raise CartError(f"Item already in {cart_type.value}", status_code=409)

    cart = get_or_create_cart(session, cart_type)
    entry = CartItem(
        cart_id=cart.id,
        item_type=item_type,
        preset_id=preset_id,
        pack_id=pack_id,
        quantity=1,
    )
    session.add(entry)
    session.commit()
    logger.info("added %s %s to %s", item_type.value, item_id, cart_type.value)
    return entry


def move_entry(session: Session, item_id: str, from_type: CartType, to_type: CartType) -> CartItem:
    """Move an item between collections in one transaction.

    If the destination already holds the item, the source entry is
    dropped and the existing destination entry is returned.
    """
    if from_type == to_type:
        raise CartError("Source and destination are the same")
    entry = find_entry(session, from_type, item_id)
    if entry is None:
        raise CartError(f"Item not found in {from_type.value}", status_code=404)

    existing = find_entry(session, to_type, item_id)
    if existing is not None:
        session.delete(entry)
        result = existing
    else:
        entry.cart_id = get_or_create_cart(session, to_type).id
        entry.updated_at = utc_now()
        result = entry
    session.commit()
    logger.info("moved %s from %s to %s", item_id, from_type.value, to_type.value)
    return result


def remove_entry(session: Session, cart_type: CartType, item_id: str) -> None:
    entry = find_entry(session, cart_type, item_id)
    if entry is None:
        raise CartError(f"Item not found in {cart_type.value}", status_code=404)
    session.delete(entry)
    session.commit()
    logger.info("removed %s from %s", item_id, cart_type.value)
