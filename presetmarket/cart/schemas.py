from datetime import datetime
from typing import Optional

from ..catalog.schemas import CamelModel
from ..models import CartType, ItemType


class CartEntryOut(CamelModel):
    id: str
    cart_id: str
    item_type: ItemType
    preset_id: Optional[str] = None
    pack_id: Optional[str] = None
    quantity: int
    created_at: datetime
    updated_at: datetime


class MoveResult(CamelModel):
    item_id: str
    from_type: CartType
    to_type: CartType
    entry: CartEntryOut
