# presetmarket/models.py
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ItemType(str, Enum):
    PRESET = "preset"
    PACK = "pack"

    @property
    def plural(self) -> str:
        return f"{self.value}s"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class CartType(str, Enum):
    CART = "cart"
    WISHLIST = "wishlist"


class ContentViewMode(str, Enum):
    UPLOADED = "uploaded"
    DOWNLOADED = "downloaded"
    BROWSE = "browse"


class AddCartItemRequest(BaseModel):
    """Body of ``POST /api/cart/{cart_type}``; exactly one id is expected."""

    model_config = ConfigDict(populate_by_name=True)

    preset_id: Optional[str] = Field(default=None, alias="presetId")
    pack_id: Optional[str] = Field(default=None, alias="packId")


class MoveCartItemRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    item_id: str = Field(alias="itemId")
    from_type: Optional[CartType] = Field(default=None, alias="from")
    to_type: CartType = Field(default=CartType.CART, alias="to")


class RemoveCartItemRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    item_id: str = Field(alias="itemId")


class ErrorMessage(BaseModel):
    error: str


class Message(BaseModel):
    message: str
