"""
Cart, wishlist and item actions for one catalog item.

Each user-facing action is a ``Mutation``: it runs an API call, keeps an
``is_pending`` flag while the call is in flight, and routes the outcome
to success or error callbacks. Callbacks invalidate the affected query
cache entries and emit toasts. No ``ActionError`` escapes a handler.

Adding to the cart is optimistic. The entry is shown immediately, then
either confirmed by re-fetching the cart after the server accepted it,
or reverted by re-fetching the cart after a failure.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from ..models import CartType, ContentViewMode, ItemType
from .api import ApiClient
from .errors import ActionError
from .navigation import Navigator
from .notify import Toaster
from .state import AppState, CartEntry

logger = logging.getLogger(__name__)


class Mutation:
    def __init__(
        self,
        fn: Callable[..., Any],
        on_success: Optional[Callable[..., None]] = None,
        on_error: Optional[Callable[..., None]] = None,
    ):
        self.fn = fn
        self.on_success = on_success
        self.on_error = on_error
        self.is_pending = False
        self.error: Optional[ActionError] = None

    def mutate(self, *args) -> Any:
        """Run the mutation; returns the result, or ``None`` when it failed."""
        self.is_pending = True
        self.error = None
        try:
            result = self.fn(*args)
        except ActionError as e:
            self.error = e
            if self.on_error:
                self.on_error(e, *args)
            return None
        finally:
            self.is_pending = False
        if self.on_success:
            self.on_success(result, *args)
        return result


class ItemActions:
    def __init__(
        self,
        item_id: str,
        item_type: ItemType,
        state: AppState,
        api: ApiClient,
        toaster: Toaster,
        navigator: Navigator,
        content_view_mode: Optional[ContentViewMode] = None,
    ):
        self.item_id = item_id
        self.item_type = item_type
        self.state = state
        self.api = api
        self.toaster = toaster
        self.navigator = navigator
        self.content_view_mode = content_view_mode

        self._add_to_cart = Mutation(self._add_to_cart_fn, self._added_to_cart, self._add_to_cart_failed)
        self._add_to_wishlist = Mutation(self._add_to_wishlist_fn, self._added_to_wishlist, self._toast_error)
        self._move = Mutation(self._move_fn, self._moved, self._toast_error)
        self._remove = Mutation(self._remove_fn, self._removed, self._toast_error)
        self._delete = Mutation(self._delete_fn, self._deleted, self._toast_error)
        self._edit = Mutation(self._edit_fn)

    @property
    def _label(self) -> str:
        return self.item_type.label

    def _toast_error(self, error: ActionError, *args) -> None:
        self.toaster.error(error.message)

    def _refetch(self, cart_type: CartType) -> None:
        entries = [CartEntry.from_json(e) for e in self.api.fetch_collection(cart_type)]
        self.state.replace_all(cart_type, entries)

    # -- add to cart ---------------------------------------------------------

    def _tentative_entry(self) -> CartEntry:
        return CartEntry(id=self.item_id, item_type=self.item_type, item_id=self.item_id, quantity=1)

    def _add_to_cart_fn(self) -> Any:
        self.state.apply_optimistic(CartType.CART, self._tentative_entry())
        return self.api.add_to_collection(
            CartType.CART, self.item_type, self.item_id, fallback="Failed to add to cart"
        )

    def _added_to_cart(self, result: Any) -> None:
        self.state.cache.invalidate(CartType.CART.value)
        try:
            self._refetch(CartType.CART)
        except ActionError as e:
            # The server accepted the item, so the tentative entry is right.
            logger.warning("cart refresh after add failed: %s", e.message)
            self.state.confirm(CartType.CART, self.item_id)
        self.toaster.success(f"{self._label} added to cart")

    def _add_to_cart_failed(self, error: ActionError) -> None:
        try:
            self._refetch(CartType.CART)
        except ActionError as e:
            logger.warning("cart refresh after failed add failed: %s", e.message)
            self.state.discard_tentative(CartType.CART, self.item_id)
        self.toaster.error(error.message)

    def handle_add_to_cart(self) -> bool:
        """Add the item to the cart; returns ``False`` when it did not end up there."""
        if self.state.is_loading(self.item_id):
            logger.debug("add to cart for %s skipped, already in flight", self.item_id)
            return False
        self.state.set_loading(self.item_id, True)
        try:
            self._add_to_cart.mutate()
        finally:
            self.state.set_loading(self.item_id, False)
        return self._add_to_cart.error is None

    # -- add to wishlist -----------------------------------------------------

    def _add_to_wishlist_fn(self) -> Any:
        return self.api.add_to_collection(
            CartType.WISHLIST, self.item_type, self.item_id, fallback="Failed to add to wishlist"
        )

    def _added_to_wishlist(self, result: Any) -> None:
        self.state.cache.invalidate(CartType.WISHLIST.value)
        self.toaster.success(f"{self._label} added to wishlist")

    def handle_add_to_wishlist(self) -> bool:
        self._add_to_wishlist.mutate()
        return self._add_to_wishlist.error is None

    # -- move ----------------------------------------------------------------

    def _move_fn(self, from_type: CartType) -> Any:
        return self.api.move_item(self.item_id, from_type, CartType.CART)

    def _moved(self, result: Any, from_type: CartType) -> None:
        self.state.move(self.item_id, from_type, CartType.CART)
        self.state.cache.invalidate(CartType.CART.value)
        self.state.cache.invalidate(CartType.WISHLIST.value)
        # Cart first: the item is never missing from both collections.
        try:
            self._refetch(CartType.CART)
            self._refetch(CartType.WISHLIST)
        except ActionError as e:
            logger.warning("refresh after move failed: %s", e.message)
        self.toaster.success(f"{self._label} moved to cart")

    def handle_move_to_cart(self, from_type: CartType = CartType.WISHLIST) -> bool:
        if self.state.is_loading(self.item_id):
            return False
        self.state.set_loading(self.item_id, True)
        try:
            self._move.mutate(from_type)
        finally:
            self.state.set_loading(self.item_id, False)
        return self._move.error is None

    # -- remove --------------------------------------------------------------

    def _remove_fn(self, from_type: CartType) -> Any:
        return self.api.remove_item(self.item_id, from_type)

    def _removed(self, result: Any, from_type: CartType) -> None:
        self.state.remove(from_type, self.item_id)
        self.state.cache.invalidate(from_type.value)
        self.toaster.success(f"{self._label} removed from {from_type.value}")

    def handle_remove_item(self, from_type: CartType) -> bool:
        if self.state.is_loading(self.item_id):
            return False
        self.state.set_loading(self.item_id, True)
        try:
            self._remove.mutate(from_type)
        finally:
            self.state.set_loading(self.item_id, False)
        return self._remove.error is None

    # -- delete / edit (owned items) -----------------------------------------

    def _delete_fn(self) -> Any:
        return self.api.delete_item(self.item_type, self.item_id)

    def _deleted(self, result: Any) -> None:
        self.state.cache.invalidate(self.item_type.plural)
        self.toaster.success(f"{self._label} deleted successfully")
        if self.content_view_mode is ContentViewMode.UPLOADED:
            self.navigator.push(f"/dashboard/{self.item_type.plural}")

    def handle_delete(self) -> bool:
        self._delete.mutate()
        return self._delete.error is None

    def _edit_fn(self) -> None:
        self.navigator.push(f"/dashboard/{self.item_type.plural}/edit/{self.item_id}")

    def handle_edit(self) -> None:
        self._edit.mutate()

    # -- reads ---------------------------------------------------------------

    def in_collection(self, cart_type: CartType) -> bool:
        """Whether the item is in ``cart_type``, re-fetching an invalidated collection."""
        try:
            entries = self.state.load(cart_type, lambda: self.api.fetch_collection(cart_type))
        except ActionError as e:
            logger.warning("could not load %s: %s", cart_type.value, e.message)
            entries = self.state.entries(cart_type)
        return any(e.item_id == self.item_id for e in entries)

    # -- in-flight flags -----------------------------------------------------

    @property
    def is_loading(self) -> bool:
        return self.state.is_loading(self.item_id)

    @property
    def is_adding_to_cart(self) -> bool:
        return self._add_to_cart.is_pending

    @property
    def is_adding_to_wishlist(self) -> bool:
        return self._add_to_wishlist.is_pending

    @property
    def is_moving_to_cart(self) -> bool:
        return self._move.is_pending

    @property
    def is_removing(self) -> bool:
        return self._remove.is_pending

    @property
    def is_deleting(self) -> bool:
        return self._delete.is_pending

    @property
    def is_editing(self) -> bool:
        return self._edit.is_pending
