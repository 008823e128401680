"""
Tests for catalog cards rendering and wiring.
"""
from unittest.mock import MagicMock

import pytest

from presetmarket.client import (
    ItemActions,
    NullAudioBackend,
    PresetCard,
    PresetPackCard,
    PreviewPlayer,
    format_price,
)
from presetmarket.models import CartType, ContentViewMode, ItemType


def _preset(i, url=True):
    return {
        "id": f"p{i}",
        "title": f"Preset {i}",
        "description": None,
        "price": 1.0,
        "soundPreviewUrl": f"https://cdn.example.com/p{i}.mp3" if url else None,
        "createdAt": "2024-01-01T12:00:00Z",
    }


@pytest.fixture
def pack_json():
    presets = [_preset(i, url=(i != 2)) for i in range(1, 8)]
    return {
        "id": "pack1",
        "title": "Festival Pack",
        "description": "Main stage",
        "price": 19.99,
        "createdAt": "2024-01-07T12:00:00Z",
        "soundDesigner": {"username": "synthwiz"},
        "presets": [{"preset": p} for p in presets],
    }


@pytest.fixture
def actions():
    mock = MagicMock(spec=ItemActions, is_deleting=False, is_loading=False, is_adding_to_cart=False)
    mock.in_collection.return_value = False
    return mock


@pytest.fixture
def backend():
    return NullAudioBackend()


@pytest.fixture
def pack_card(pack_json, actions, backend, toaster):
    return PresetPackCard(pack_json, actions, PreviewPlayer(toaster, backend), is_owner=True)


class TestFormatPrice:
    @pytest.mark.parametrize("price,text", [(0, "Free"), (4.5, "$4.50"), (1234, "$1,234.00")])
    def test_format(self, price, text):
        assert format_price(price) == text


class TestPresetPackCard:
    def test_render(self, pack_card):
        view = pack_card.render()
        assert view.title == "Festival Pack"
        assert view.price == "$19.99"
        assert view.preset_count == "7 Presets Included"
        assert view.designer == "By: synthwiz"
        assert view.details_link == "/packs/pack1"
        assert view.owner_controls
        assert [r.id for r in view.rows] == ["p1", "p2", "p3", "p4", "p5"]
        assert [r.can_preview for r in view.rows] == [True, False, True, True, True]
        assert not any(r.playing for r in view.rows)

    def test_rows_follow_playback(self, pack_card, backend):
        pack_card.toggle_preview("p3")
        assert [r.id for r in pack_card.render().rows if r.playing] == ["p3"]

        pack_card.toggle_preview("p4")
        assert [r.id for r in pack_card.render().rows if r.playing] == ["p4"]
        assert len(backend.live) == 1

        pack_card.toggle_preview("p4")
        assert not any(r.playing for r in pack_card.render().rows)

    def test_preset_without_preview(self, pack_card, toaster, backend):
        pack_card.toggle_preview("p2")
        assert backend.opened == []
        assert toaster.last.message == "No preview available for this preset"

    def test_hidden_preset_cannot_be_previewed(self, pack_card):
        with pytest.raises(KeyError):
            pack_card.toggle_preview("p7")

    def test_close_stops_preview(self, pack_card, backend):
        pack_card.toggle_preview("p1")
        pack_card.close()
        assert backend.live == []

    def test_owner_actions_are_wired(self, pack_card, actions):
        pack_card.delete()
        pack_card.edit()
        pack_card.add_to_wishlist()
        actions.handle_delete.assert_called_once_with()
        actions.handle_edit.assert_called_once_with()
        actions.handle_add_to_wishlist.assert_called_once_with()

    def test_non_owner_cannot_delete(self, pack_json, actions, toaster):
        card = PresetPackCard(pack_json, actions, PreviewPlayer(toaster))
        assert not card.render().owner_controls
        with pytest.raises(PermissionError):
            card.delete()
        actions.handle_delete.assert_not_called()


class TestPresetCard:
    def test_render_and_controls(self, actions, toaster, backend):
        card = PresetCard(_preset(1), actions, PreviewPlayer(toaster, backend))
        view = card.render()
        assert view.price == "$1.00"
        assert view.details_link == "/presets/p1"
        assert view.designer is None

        card.toggle_preview()
        assert card.render().rows[0].playing

        card.add_to_cart()
        card.move_to_cart()
        card.remove_from(CartType.WISHLIST)
        actions.handle_add_to_cart.assert_called_once_with()
        actions.handle_move_to_cart.assert_called_once_with(CartType.WISHLIST)
        actions.handle_remove_item.assert_called_once_with(CartType.WISHLIST)

    def test_collection_flags(self, actions, toaster):
        actions.in_collection.side_effect = lambda cart_type: cart_type is CartType.WISHLIST
        view = PresetCard(_preset(1), actions, PreviewPlayer(toaster)).render()
        assert view.in_wishlist
        assert not view.in_cart


class TestCardAgainstServer:
    def test_owner_deletes_pack_from_uploaded_view(self, api, client, state, toaster, navigator):
        pack_json = api.get_item(ItemType.PACK, "pack1")
        actions = ItemActions(
            "pack1", ItemType.PACK, state, api, toaster, navigator,
            content_view_mode=ContentViewMode.UPLOADED,
        )
        card = PresetPackCard(pack_json, actions, PreviewPlayer(toaster), is_owner=True)
        assert card.render().preset_count == "6 Presets Included"

        assert card.delete()
        assert navigator.path == "/dashboard/packs"
        assert client.get("/api/packs").json() == []

    def test_wishlist_flag_follows_server_after_add(self, api, state, toaster, navigator):
        actions = ItemActions("pack1", ItemType.PACK, state, api, toaster, navigator)
        card = PresetPackCard(api.get_item(ItemType.PACK, "pack1"), actions, PreviewPlayer(toaster))
        assert not card.render().in_wishlist

        assert card.add_to_wishlist()
        assert card.render().in_wishlist
