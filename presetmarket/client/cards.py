"""
Catalog cards.

A card turns a catalog item (the API's JSON, validated with the catalog
schemas) into a ``CardView`` that a front-end can draw, and routes
button presses to ``ItemActions`` and to the card's ``PreviewPlayer``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from ..catalog.schemas import PackOut, PresetOut
from ..config import MAX_PACK_PRESETS_SHOWN
from ..models import CartType
from .actions import ItemActions
from .preview import PreviewPlayer


def format_price(price: float) -> str:
    if not price:
        return "Free"
    return f"${price:,.2f}"


@dataclass
class PresetRowView:
    id: str
    title: str
    can_preview: bool
    playing: bool


@dataclass
class CardView:
    id: str
    title: str
    price: str
    details_link: str
    description: Optional[str] = None
    designer: Optional[str] = None
    preset_count: Optional[str] = None
    rows: List[PresetRowView] = field(default_factory=list)
    owner_controls: bool = False
    in_cart: bool = False
    in_wishlist: bool = False
    busy: bool = False


class PresetPackCard:
    def __init__(
        self,
        pack: Union[PackOut, Dict[str, Any]],
        actions: ItemActions,
        player: PreviewPlayer,
        is_owner: bool = False,
    ):
        self.pack = pack if isinstance(pack, PackOut) else PackOut.model_validate(pack)
        self.actions = actions
        self.player = player
        self.is_owner = is_owner

    @property
    def displayed_presets(self) -> List[PresetOut]:
        return [ref.preset for ref in self.pack.presets[:MAX_PACK_PRESETS_SHOWN]]

    def render(self) -> CardView:
        pack = self.pack
        rows = [
            PresetRowView(
                id=p.id,
                title=p.title,
                can_preview=bool(p.sound_preview_url),
                playing=self.player.is_playing(p.id),
            )
            for p in self.displayed_presets
        ]
        return CardView(
            id=pack.id,
            title=pack.title,
            price=format_price(pack.price),
            details_link=f"/packs/{pack.id}",
            description=pack.description or None,
            designer=f"By: {pack.sound_designer.username}" if pack.sound_designer else None,
            preset_count=f"{len(pack.presets)} Presets Included",
            rows=rows,
            owner_controls=self.is_owner,
            in_wishlist=self.actions.in_collection(CartType.WISHLIST),
            busy=self.actions.is_deleting,
        )

    def toggle_preview(self, preset_id: str) -> None:
        for preset in self.displayed_presets:
            if preset.id == preset_id:
                self.player.toggle(preset.id, preset.sound_preview_url)
                return
        raise KeyError(preset_id)

    def add_to_wishlist(self) -> bool:
        return self.actions.handle_add_to_wishlist()

    def delete(self) -> bool:
        if not self.is_owner:
            raise PermissionError("only the owner can delete this pack")
        return self.actions.handle_delete()

    def edit(self) -> None:
        if not self.is_owner:
            raise PermissionError("only the owner can edit this pack")
        self.actions.handle_edit()

    def close(self) -> None:
        self.player.close()


class PresetCard:
    """Single preset with its own preview button and cart controls."""

    def __init__(
        self,
        preset: Union[PresetOut, Dict[str, Any]],
        actions: ItemActions,
        player: PreviewPlayer,
        is_owner: bool = False,
    ):
        self.preset = preset if isinstance(preset, PresetOut) else PresetOut.model_validate(preset)
        self.actions = actions
        self.player = player
        self.is_owner = is_owner

    def render(self) -> CardView:
        preset = self.preset
        row = PresetRowView(
            id=preset.id,
            title=preset.title,
            can_preview=bool(preset.sound_preview_url),
            playing=self.player.is_playing(preset.id),
        )
        actions = self.actions
        return CardView(
            id=preset.id,
            title=preset.title,
            price=format_price(preset.price),
            details_link=f"/presets/{preset.id}",
            description=preset.description or None,
            designer=f"By: {preset.sound_designer.username}" if preset.sound_designer else None,
            rows=[row],
            owner_controls=self.is_owner,
            in_cart=actions.in_collection(CartType.CART),
            in_wishlist=actions.in_collection(CartType.WISHLIST),
            busy=actions.is_loading or actions.is_adding_to_cart or actions.is_deleting,
        )

    def toggle_preview(self) -> None:
        self.player.toggle(self.preset.id, self.preset.sound_preview_url)

    def add_to_cart(self) -> bool:
        return self.actions.handle_add_to_cart()

    def add_to_wishlist(self) -> bool:
        return self.actions.handle_add_to_wishlist()

    def move_to_cart(self) -> bool:
        return self.actions.handle_move_to_cart(CartType.WISHLIST)

    def remove_from(self, cart_type: CartType) -> bool:
        return self.actions.handle_remove_item(cart_type)

    def delete(self) -> bool:
        if not self.is_owner:
            raise PermissionError("only the owner can delete this preset")
        return self.actions.handle_delete()

    def edit(self) -> None:
        if not self.is_owner:
            raise PermissionError("only the owner can edit this preset")
        self.actions.handle_edit()

    def close(self) -> None:
        self.player.close()
