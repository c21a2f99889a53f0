"""Tests for the currency and item transfer primitives."""

import pytest

from tradepost import Actor, CurrencyAmount, Item, ItemType, MessageType, Topics

from services.merchant.state import SessionState, TradeError
from services.merchant.trade import Trade
from tests.fakes import FakeBus


def _state() -> SessionState:
    state = SessionState()
    state.add_actor(Actor(id="pc-01", name="Vex", currency={"gp": 50}))
    state.add_actor(Actor(id="m-1", name="Hobb", kind="merchant", currency={"gp": 5}))
    state.add_item(
        Item(id="arrows", name="Arrows", type=ItemType.CONSUMABLE, owner_id="m-1", quantity=40)
    )
    return state


class TestCurrencyTransfer:
    async def test_moves_money(self):
        state = _state()
        trade = Trade(state)
        player, merchant = state.get_actor("pc-01"), state.get_actor("m-1")
        await trade.currency(from_actor=player, to_actor=merchant, amount=CurrencyAmount(copper=3000))
        assert player.currency == {"gp": 20, "sp": 0, "cp": 0}  # type: ignore[union-attr]
        assert merchant.currency == {"gp": 35, "sp": 0, "cp": 0}  # type: ignore[union-attr]

    async def test_refuses_overdraw(self):
        state = _state()
        trade = Trade(state)
        merchant, player = state.get_actor("m-1"), state.get_actor("pc-01")
        with pytest.raises(TradeError):
            await trade.currency(from_actor=merchant, to_actor=player, amount=CurrencyAmount(copper=1000))
        assert player.currency == {"gp": 50}  # type: ignore[union-attr]

    async def test_records_on_ledger(self):
        state = _state()
        bus = FakeBus()
        trade = Trade(state, bus)  # type: ignore[arg-type]
        await trade.currency(
            from_actor=state.get_actor("pc-01"),
            to_actor=state.get_actor("m-1"),
            amount=CurrencyAmount(copper=250),
        )
        topic, env = bus.published[0]
        assert topic == Topics.LEDGER
        assert env.type == MessageType.CURRENCY_TRANSFER
        assert env.payload == {"from_actor": "pc-01", "to_actor": "m-1", "copper": 250}


class TestItemTransfer:
    async def test_partial_stack(self):
        state = _state()
        trade = Trade(state)
        item = state.get_item("arrows")
        await trade.item(
            from_actor=state.get_actor("m-1"), to_actor=state.get_actor("pc-01"), item=item, count=3
        )
        assert item.quantity == 37  # type: ignore[union-attr]
        owned = state.items_owned_by("pc-01")
        assert [(i.name, i.quantity) for i in owned] == [("Arrows", 3)]

    async def test_whole_item(self):
        state = _state()
        trade = Trade(state)
        item = state.get_item("arrows")
        await trade.item(from_actor=state.get_actor("m-1"), to_actor=state.get_actor("pc-01"), item=item)
        assert item.owner_id == "pc-01"  # type: ignore[union-attr]

    async def test_wrong_holder(self):
        state = _state()
        trade = Trade(state)
        with pytest.raises(TradeError, match="not held by"):
            await trade.item(
                from_actor=state.get_actor("pc-01"),
                to_actor=state.get_actor("m-1"),
                item=state.get_item("arrows"),
            )

    async def test_records_on_ledger(self):
        state = _state()
        bus = FakeBus()
        trade = Trade(state, bus)  # type: ignore[arg-type]
        await trade.item(
            from_actor=state.get_actor("m-1"),
            to_actor=state.get_actor("pc-01"),
            item=state.get_item("arrows"),
            count=5,
        )
        _, env = bus.published[0]
        assert env.type == MessageType.ITEM_TRANSFER
        assert env.payload["quantity"] == 5
        assert env.payload["item_name"] == "Arrows"
