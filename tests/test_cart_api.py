"""
Tests for the cart and wishlist endpoints.
"""
import pytest


def _item_ids(client, cart_type):
    return [e["presetId"] or e["packId"] for e in client.get(f"/api/cart/{cart_type}").json()]


class TestAdd:
    def test_add_preset_to_cart(self, client, seeded):
        response = client.post("/api/cart/cart", json={"presetId": "p1"})
        assert response.status_code == 200
        entry = response.json()
        assert entry["presetId"] == "p1"
        assert entry["packId"] is None
        assert entry["itemType"] == "preset"
        assert entry["quantity"] == 1
        assert _item_ids(client, "cart") == ["p1"]
        assert _item_ids(client, "wishlist") == []

    def test_add_pack_to_wishlist(self, client, seeded):
        client.post("/api/cart/wishlist", json={"packId": "pack1"})
        assert _item_ids(client, "wishlist") == ["pack1"]

    def test_duplicate_is_rejected(self, client, seeded):
        client.post("/api/cart/cart", json={"presetId": "p1"})
        response = client.post("/api/cart/cart", json={"presetId": "p1"})
        assert response.status_code == 409
        assert response.json() == {"error": "Item already in cart"}

    @pytest.mark.parametrize("body", [{}, {"presetId": "p1", "packId": "pack1"}])
    def test_exactly_one_id_required(self, client, seeded, body):
        response = client.post("/api/cart/cart", json=body)
        assert response.status_code == 400
        assert "exactly one" in response.json()["error"].lower()

    def test_unknown_item(self, client, seeded):
        response = client.post("/api/cart/cart", json={"presetId": "missing"})
        assert response.status_code == 404

    def test_unknown_collection(self, client, seeded):
        response = client.post("/api/cart/basket", json={"presetId": "p1"})
        assert response.status_code == 422


class TestMove:
    def test_move_wishlist_to_cart(self, client, seeded):
        added = client.post("/api/cart/wishlist", json={"presetId": "p3"}).json()
        response = client.put("/api/cart/wishlist", json={"itemId": "p3", "from": "wishlist", "to": "cart"})
        assert response.status_code == 200
        body = response.json()
        assert body["toType"] == "cart"
        # the same entry changed collection
        assert body["entry"]["id"] == added["id"]
        assert _item_ids(client, "cart") == ["p3"]
        assert _item_ids(client, "wishlist") == []

    def test_move_into_collection_already_holding_item(self, client, seeded):
        client.post("/api/cart/wishlist", json={"presetId": "p3"})
        in_cart = client.post("/api/cart/cart", json={"presetId": "p3"}).json()
        body = client.put("/api/cart/wishlist", json={"itemId": "p3", "to": "cart"}).json()
        assert body["entry"]["id"] == in_cart["id"]
        assert _item_ids(client, "cart") == ["p3"]
        assert _item_ids(client, "wishlist") == []

    def test_move_missing_item(self, client, seeded):
        response = client.put("/api/cart/wishlist", json={"itemId": "p3", "to": "cart"})
        assert response.status_code == 404
        assert response.json() == {"error": "Item not found in wishlist"}

    def test_source_must_match_url(self, client, seeded):
        response = client.put("/api/cart/wishlist", json={"itemId": "p3", "from": "cart", "to": "cart"})
        assert response.status_code == 400


class TestRemove:
    def test_remove_only_touches_source(self, client, seeded):
        client.post("/api/cart/cart", json={"presetId": "p1"})
        client.post("/api/cart/wishlist", json={"presetId": "p1"})
        response = client.request("DELETE", "/api/cart/wishlist", json={"itemId": "p1"})
        assert response.status_code == 200
        assert _item_ids(client, "wishlist") == []
        assert _item_ids(client, "cart") == ["p1"]

    def test_remove_missing(self, client, seeded):
        response = client.request("DELETE", "/api/cart/cart", json={"itemId": "p1"})
        assert response.status_code == 404
