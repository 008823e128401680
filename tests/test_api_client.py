"""
Tests for ApiClient error mapping and catalog reads.
"""
from unittest.mock import MagicMock

import pytest
import requests

from presetmarket.client import ActionError, ApiClient
from presetmarket.models import CartType, ItemType


def _response(status_code, body=None, text=None):
    response = MagicMock(status_code=status_code)
    if text is not None:
        response.json.side_effect = ValueError("Expecting value")
        response.text = text
    else:
        response.json.return_value = body
    return response


def _client(**request_kwargs):
    session = MagicMock()
    session.request.configure_mock(**request_kwargs)
    return ApiClient(session=session, base_url="http://shop/"), session


class TestErrorMapping:
    def test_connection_failure_uses_fallback(self):
        api, _ = _client(side_effect=requests.ConnectionError("refused"))
        with pytest.raises(ActionError) as exc:
            api.fetch_collection(CartType.WISHLIST)
        assert exc.value.message == "Failed to fetch wishlist"
        assert exc.value.status_code is None

    def test_timeout_uses_fallback(self):
        api, _ = _client(side_effect=requests.Timeout("slow"))
        with pytest.raises(ActionError) as exc:
            api.add_to_collection(CartType.CART, ItemType.PRESET, "p1", fallback="Failed to add to cart")
        assert exc.value.message == "Failed to add to cart"

    def test_server_error_with_text_body(self):
        api, _ = _client(return_value=_response(500, text="Internal Server Error"))
        with pytest.raises(ActionError) as exc:
            api.move_item("p1", CartType.WISHLIST)
        assert exc.value.message == "Failed to move item"
        assert exc.value.status_code == 500

    def test_error_body_without_message(self):
        api, _ = _client(return_value=_response(409, body={"detail": "conflict"}))
        with pytest.raises(ActionError) as exc:
            api.remove_item("p1", CartType.CART)
        assert exc.value.message == "Failed to remove item"
        assert exc.value.status_code == 409

    def test_server_message_wins_over_fallback(self):
        api, _ = _client(return_value=_response(400, body={"error": "Item already in cart"}))
        with pytest.raises(ActionError) as exc:
            api.add_to_collection(CartType.CART, ItemType.PACK, "pack1")
        assert exc.value.message == "Item already in cart"

    def test_non_json_success_body(self):
        api, _ = _client(return_value=_response(200, text="<html>maintenance</html>"))
        with pytest.raises(ActionError) as exc:
            api.get_item(ItemType.PRESET, "p1")
        assert exc.value.message == "Failed to fetch preset"
        assert exc.value.status_code == 200

    def test_request_shape(self):
        api, session = _client(return_value=_response(200, body={"id": "e1"}))
        api.add_to_collection(CartType.WISHLIST, ItemType.PACK, "pack1")
        session.request.assert_called_once_with(
            "POST",
            "http://shop/api/cart/wishlist",
            timeout=api.timeout,
            json={"presetId": None, "packId": "pack1"},
        )


class TestCatalogReads:
    """Catalog reads against the app in-process."""

    def test_search(self, api, seeded):
        assert {p["id"] for p in api.search(search_term="foo")} == {"p2", "p4"}

    def test_search_combines_filters(self, api, seeded):
        rows = api.search(genres=["g-techno"], vst_types=["EFFECT"])
        assert [p["id"] for p in rows] == ["p4"]

    def test_search_without_filters(self, api, seeded):
        assert [p["id"] for p in api.search()] == list(reversed(seeded["presets"]))

    def test_list_items(self, api, seeded):
        assert len(api.list_items(ItemType.PRESET)) == len(seeded["presets"])
        assert [p["id"] for p in api.list_items(ItemType.PACK)] == ["pack1"]
