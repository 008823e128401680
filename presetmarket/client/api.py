"""
HTTP client for the marketplace API.

``ApiClient`` wraps a ``requests.Session`` (or anything exposing the
same ``request()`` method, such as FastAPI's ``TestClient``). Every
non-success response is turned into an ``ActionError`` carrying the
server's ``error`` message, or the fallback message given for the
operation when the server did not provide one. Transport failures are
reported the same way with the fallback message.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

import requests

from ..config import API_BASE_URL, REQUEST_TIMEOUT
from ..models import CartType, ItemType
from .errors import ActionError

logger = logging.getLogger(__name__)


class ApiClient:
    def __init__(self, session=None, base_url: str = API_BASE_URL, timeout: float = REQUEST_TIMEOUT):
        self.session = session if session is not None else requests.Session()
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _request(self, method: str, path: str, fallback: str, **kwargs) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise ActionError(fallback) from e

        if response.status_code >= 400:
            message = fallback
            try:
                payload = response.json()
                if isinstance(payload, dict) and payload.get("error"):
                    message = str(payload["error"])
            except ValueError:
                pass
            logger.info("%s %s -> %s: %s", method, url, response.status_code, message)
            raise ActionError(message, status_code=response.status_code)
        try:
            return response.json()
        except ValueError as e:
            logger.warning("%s %s returned a non-JSON body", method, url)
            raise ActionError(fallback, status_code=response.status_code) from e

    # -- catalog -----------------------------------------------------------

    def search(
        self,
        search_term: str = "",
        genres: Iterable[str] = (),
        vst_types: Iterable[str] = (),
        preset_types: Iterable[str] = (),
    ) -> List[Dict[str, Any]]:
        params = {
            "searchTerm": search_term,
            "genres": ",".join(genres),
            "vstTypes": ",".join(vst_types),
            "presetTypes": ",".join(preset_types),
        }
        return self._request("GET", "/api/search", "Failed to fetch presets", params=params)

    def list_items(self, item_type: ItemType) -> List[Dict[str, Any]]:
        return self._request("GET", f"/api/{item_type.plural}", f"Failed to fetch {item_type.plural}")

    def get_item(self, item_type: ItemType, item_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/api/{item_type.plural}/{item_id}", f"Failed to fetch {item_type.value}")

    def delete_item(self, item_type: ItemType, item_id: str) -> Dict[str, Any]:
        return self._request("DELETE", f"/api/{item_type.plural}/{item_id}", f"Failed to delete {item_type.value}")

    # -- cart / wishlist ---------------------------------------------------

    def fetch_collection(self, cart_type: CartType) -> List[Dict[str, Any]]:
        return self._request("GET", f"/api/cart/{cart_type.value}", f"Failed to fetch {cart_type.value}")

    def add_to_collection(
        self,
        cart_type: CartType,
        item_type: ItemType,
        item_id: str,
        fallback: Optional[str] = None,
    ) -> Dict[str, Any]:
        body = {
            "presetId": item_id if item_type is ItemType.PRESET else None,
            "packId": item_id if item_type is ItemType.PACK else None,
        }
        return self._request(
            "POST",
            f"/api/cart/{cart_type.value}",
            fallback or f"Failed to add to {cart_type.value}",
            json=body,
        )

    def move_item(self, item_id: str, from_type: CartType, to_type: CartType = CartType.CART) -> Dict[str, Any]:
        body = {"itemId": item_id, "from": from_type.value, "to": to_type.value}
        return self._request("PUT", f"/api/cart/{from_type.value}", "Failed to move item", json=body)

    def remove_item(self, item_id: str, from_type: CartType) -> Dict[str, Any]:
        return self._request(
            "DELETE",
            f"/api/cart/{from_type.value}",
            "Failed to remove item",
            json={"itemId": item_id},
        )
