"""Tests for trade participant resolution."""

import pytest

from tradepost import Actor, Direction, Item

from services.merchant.participants import ParticipantError, resolve_participants
from services.merchant.state import SessionState


def _state() -> SessionState:
    state = SessionState()
    state.add_actor(Actor(id="pc-01", name="Vex"))
    state.add_actor(Actor(id="m-1", name="Hobb", kind="merchant"))
    state.add_item(Item(id="wares", name="Lantern", owner_id="m-1"))
    state.add_item(Item(id="loot", name="Gem", owner_id="pc-01"))
    return state


class TestResolveParticipants:
    def test_purchase(self):
        parts = resolve_participants(
            _state(), direction=Direction.TO_PLAYER, item_id="wares", player_id="pc-01", merchant_id="m-1"
        )
        assert parts.player.name == "Vex"
        assert parts.merchant.name == "Hobb"
        assert parts.item.name == "Lantern"

    def test_sale(self):
        parts = resolve_participants(
            _state(), direction=Direction.FROM_PLAYER, item_id="loot", player_id="pc-01", merchant_id="m-1"
        )
        assert parts.item.name == "Gem"

    @pytest.mark.parametrize(
        "player_id, merchant_id, item_id",
        [
            ("ghost", "m-1", "wares"),
            ("pc-01", "ghost", "wares"),
            ("pc-01", "m-1", "missing"),
        ],
    )
    def test_unknown_ids(self, player_id: str, merchant_id: str, item_id: str):
        with pytest.raises(ParticipantError):
            resolve_participants(
                _state(),
                direction=Direction.TO_PLAYER,
                item_id=item_id,
                player_id=player_id,
                merchant_id=merchant_id,
            )

    def test_purchase_of_players_own_item(self):
        with pytest.raises(ParticipantError, match="not owned by 'Hobb'"):
            resolve_participants(
                _state(), direction=Direction.TO_PLAYER, item_id="loot", player_id="pc-01", merchant_id="m-1"
            )

    def test_sale_of_merchants_item(self):
        with pytest.raises(ParticipantError, match="not owned by 'Vex'"):
            resolve_participants(
                _state(), direction=Direction.FROM_PLAYER, item_id="wares", player_id="pc-01", merchant_id="m-1"
            )

    def test_is_a_lookup_error(self):
        assert issubclass(ParticipantError, LookupError)
