"""
Route definitions for carts and wishlists.

Endpoints under /api/cart, where ``{cart_type}`` is ``cart`` or
``wishlist``:
- GET    /{cart_type} : list entries
- POST   /{cart_type} : add a preset or pack (quantity 1)
- PUT    /{cart_type} : move an entry from this collection to another
- DELETE /{cart_type} : remove an entry from this collection
"""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Body, Depends, HTTPException
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..models import (
    AddCartItemRequest,
    CartType,
    ErrorMessage,
    Message,
    MoveCartItemRequest,
    RemoveCartItemRequest,
)
from ..storage import get_session
from .schemas import CartEntryOut, MoveResult
from . import store

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/cart",
    tags=["cart"],
    responses={
        400: {"model": ErrorMessage},
        404: {"model": ErrorMessage},
        409: {"model": ErrorMessage},
        500: {"model": ErrorMessage},
    },
)


def _fail(session: Session, action: str, cart_type: CartType) -> JSONResponse:
    session.rollback()
    logger.exception("Error trying to %s (%s)", action, cart_type.value)
    return JSONResponse(status_code=500, content={"error": f"Failed to {action}"})


@router.get("/{cart_type}", response_model=List[CartEntryOut])
def list_entries(cart_type: CartType, session: Session = Depends(get_session)):
    try:
        return [CartEntryOut.model_validate(e) for e in store.list_entries(session, cart_type)]
    except SQLAlchemyError:
        return _fail(session, f"fetch {cart_type.value}", cart_type)


@router.post("/{cart_type}", response_model=CartEntryOut)
def add_entry(
    cart_type: CartType,
    req: AddCartItemRequest = Body(...),
    session: Session = Depends(get_session),
):
    try:
        entry = store.add_entry(session, cart_type, preset_id=req.preset_id, pack_id=req.pack_id)
    except store.CartError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except SQLAlchemyError:
        return _fail(session, f"add to {cart_type.value}", cart_type)
    return CartEntryOut.model_validate(entry)


@router.put("/{cart_type}", response_model=MoveResult)
def move_entry(
    cart_type: CartType,
    req: MoveCartItemRequest = Body(...),
    session: Session = Depends(get_session),
):
    """Move an item out of ``cart_type`` into ``req.to`` in one transaction."""
    if req.from_type is not None and req.from_type != cart_type:
        raise HTTPException(status_code=400, detail="Source collection does not match the URL")
    try:
        entry = store.move_entry(session, req.item_id, cart_type, req.to_type)
    except store.CartError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except SQLAlchemyError:
        return _fail(session, "move item", cart_type)
    return MoveResult(
        item_id=req.item_id,
        from_type=cart_type,
        to_type=req.to_type,
        entry=CartEntryOut.model_validate(entry),
    )


@router.delete("/{cart_type}", response_model=Message)
def remove_entry(
    cart_type: CartType,
    req: RemoveCartItemRequest = Body(...),
    session: Session = Depends(get_session),
):
    try:
        store.remove_entry(session, cart_type, req.item_id)
    except store.CartError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except SQLAlchemyError:
        return _fail(session, "remove item", cart_type)
    return Message(message=f"Item removed from {cart_type.value}")
