"""
Client-side application state.

``AppState`` is handed to every action handler instead of living in a
module global. It holds:

- the cart and wishlist entries, keyed by catalog item id;
- per-item loading flags, set while a cart mutation for that item is in
  flight (advisory: handlers check the flag before dispatching);
- a ``QueryCache`` of fetched results keyed by collection name
  (``cart``, ``wishlist``, ``presets``, ``packs``). Successful mutations
  call ``invalidate()`` so the next read fetches fresh data.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Optional

from ..models import CartType, ItemType

logger = logging.getLogger(__name__)


def _parse_time(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if value:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    return datetime.now(timezone.utc)


@dataclass
class CartEntry:
    id: str
    item_type: ItemType
    item_id: str
    cart_id: str = ""
    quantity: int = 1
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    # True until the server has confirmed the entry.
    tentative: bool = False

    @property
    def preset_id(self) -> Optional[str]:
        return self.item_id if self.item_type is ItemType.PRESET else None

    @property
    def pack_id(self) -> Optional[str]:
        return self.item_id if self.item_type is ItemType.PACK else None

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "CartEntry":
        """Build an entry from the API's camelCase payload."""
        item_type = ItemType(data["itemType"])
        item_id = data.get("presetId") if item_type is ItemType.PRESET else data.get("packId")
        return cls(
            id=data["id"],
            item_type=item_type,
            item_id=item_id or "",
            cart_id=data.get("cartId", ""),
            quantity=int(data.get("quantity", 1)),
            created_at=_parse_time(data.get("createdAt")),
            updated_at=_parse_time(data.get("updatedAt")),
        )


class QueryCache:
    """Fetched results keyed by name, with explicit invalidation."""

    def __init__(self):
        self._data: Dict[str, Any] = {}
        self._stale: set = set()
        self.invalidations: Counter = Counter()

    def get(self, key: str, fetch: Callable[[], Any]) -> Any:
        if key not in self._data or key in self._stale:
            self._data[key] = fetch()
            self._stale.discard(key)
        return self._data[key]

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value
        self._stale.discard(key)

    def invalidate(self, key: str) -> None:
        self._stale.add(key)
        self.invalidations[key] += 1
        logger.debug("invalidated %s", key)

    def is_stale(self, key: str) -> bool:
        return key in self._stale or key not in self._data


class AppState:
    def __init__(self):
        self._entries: Dict[CartType, Dict[str, CartEntry]] = {t: {} for t in CartType}
        self._loading: Dict[str, bool] = {}
        self.cache = QueryCache()

    # -- entries -------------------------------------------------------------

    def entries(self, cart_type: CartType) -> List[CartEntry]:
        return list(self._entries[cart_type].values())

    def contains(self, cart_type: CartType, item_id: str) -> bool:
        return item_id in self._entries[cart_type]

    def get(self, cart_type: CartType, item_id: str) -> Optional[CartEntry]:
        return self._entries[cart_type].get(item_id)

    def apply_optimistic(self, cart_type: CartType, entry: CartEntry) -> None:
        """Show ``entry`` right away, marked tentative until confirmed."""
        self._entries[cart_type][entry.item_id] = replace(entry, tentative=True)

    def confirm(self, cart_type: CartType, item_id: str) -> None:
        entry = self._entries[cart_type].get(item_id)
        if entry is not None:
            entry.tentative = False

    def discard_tentative(self, cart_type: CartType, item_id: str) -> None:
        entry = self._entries[cart_type].get(item_id)
        if entry is not None and entry.tentative:
            del self._entries[cart_type][item_id]

    def replace_all(self, cart_type: CartType, entries: Iterable[CartEntry]) -> None:
        """Swap in the authoritative collection returned by the server."""
        self._entries[cart_type] = {e.item_id: e for e in entries}
        self.cache.set(cart_type.value, self.entries(cart_type))

    def move(self, item_id: str, from_type: CartType, to_type: CartType) -> None:
        """Move an entry between collections in one step."""
        entry = self._entries[from_type].pop(item_id, None)
        if entry is not None:
            self._entries[to_type][item_id] = entry

    def load(
        self,
        cart_type: CartType,
        fetch: Callable[[], Iterable[Dict[str, Any]]],
    ) -> List[CartEntry]:
        """Return the collection, fetching it first when missing or invalidated."""

        def _fetch() -> List[CartEntry]:
            entries = [CartEntry.from_json(e) for e in fetch()]
            self._entries[cart_type] = {e.item_id: e for e in entries}
            return entries

        self.cache.get(cart_type.value, _fetch)
        return self.entries(cart_type)

    def remove(self, cart_type: CartType, item_id: str) -> None:
        self._entries[cart_type].pop(item_id, None)

    # -- loading flags -------------------------------------------------------

    def set_loading(self, item_id: str, loading: bool) -> None:
        if loading:
            self._loading[item_id] = True
        else:
            self._loading.pop(item_id, None)

    def is_loading(self, item_id: str) -> bool:
        return self._loading.get(item_id, False)
