"""Tests for the quantity prompt dispatcher and the bus-backed prompt."""

import asyncio

import pytest

from tradepost import (
    Direction,
    Envelope,
    MessageType,
    MultiTransaction,
    QuantityReply,
    Topics,
    create_message,
)

from services.merchant.prompt import BusQuantityPrompt, Cancelled, Chosen, PromptCancelled
from services.merchant.transactions import prompt_for_item_count
from tests.fakes import FakeBus, FakePrompt


def _descriptor(direction: Direction = Direction.TO_PLAYER) -> MultiTransaction:
    return MultiTransaction(
        player_id="pc-01",
        merchant_id="m-1",
        item_id="arrows",
        direction=direction,
        target="sheet",
        item_name="Arrows",
        available=5,
        unit_price="10 gp",
    )


def _reply(**payload) -> Envelope:
    return create_message(
        from_agent="pc-01",
        topic=Topics.quantity_prompt("pc-01"),
        msg_type=MessageType.QUANTITY_REPLY,
        payload=QuantityReply(**payload),
    )


class TestPromptForItemCount:
    async def test_to_player_uses_purchase_prompt(self):
        prompt = FakePrompt(count=3)
        outcome = await prompt_for_item_count(_descriptor(Direction.TO_PLAYER), prompt)
        assert outcome == Chosen(count=3)
        assert [flavor for flavor, _ in prompt.calls] == ["purchase"]

    async def test_from_player_uses_sell_prompt(self):
        prompt = FakePrompt(count=2)
        outcome = await prompt_for_item_count(_descriptor(Direction.FROM_PLAYER), prompt)
        assert outcome == Chosen(count=2)
        assert [flavor for flavor, _ in prompt.calls] == ["sell"]

    async def test_passes_descriptor_through(self):
        prompt = FakePrompt(count=1)
        descriptor = _descriptor()
        await prompt_for_item_count(descriptor, prompt)
        assert prompt.calls[0][1] == descriptor

    @pytest.mark.parametrize(
        "error",
        [
            PromptCancelled("dismissed"),
            asyncio.TimeoutError(),
            RuntimeError("window closed"),
            ValueError("not a number"),
            KeyError("player"),
        ],
    )
    async def test_any_prompt_error_becomes_cancelled(self, error: Exception):
        outcome = await prompt_for_item_count(_descriptor(), FakePrompt(error=error))
        assert isinstance(outcome, Cancelled)
        assert outcome.reason

    @pytest.mark.parametrize("count", [0, -1])
    async def test_non_positive_count_is_cancelled(self, count: int):
        outcome = await prompt_for_item_count(_descriptor(), FakePrompt(count=count))
        assert isinstance(outcome, Cancelled)


class TestBusQuantityPrompt:
    async def test_sends_prompt_to_player(self):
        bus = FakeBus(reply=_reply(count=4))
        prompt = BusQuantityPrompt(bus, timeout=7.5)  # type: ignore[arg-type]
        count = await prompt.purchase(_descriptor())
        assert count == 4
        topic, env, timeout = bus.requests[0]
        assert topic == "/prompt/pc-01"
        assert env.type == MessageType.QUANTITY_PROMPT
        assert env.payload["item_name"] == "Arrows"
        assert env.payload["direction"] == "to-player"
        assert timeout == 7.5

    async def test_sell_flavor(self):
        bus = FakeBus(reply=_reply(count=1))
        prompt = BusQuantityPrompt(bus)  # type: ignore[arg-type]
        assert await prompt.sell(_descriptor(Direction.FROM_PLAYER)) == 1

    async def test_cancelled_reply_raises(self):
        bus = FakeBus(reply=_reply(cancelled=True))
        prompt = BusQuantityPrompt(bus)  # type: ignore[arg-type]
        with pytest.raises(PromptCancelled):
            await prompt.purchase(_descriptor())

    async def test_wrong_reply_type_raises(self):
        wrong = create_message(
            from_agent="pc-01",
            topic=Topics.quantity_prompt("pc-01"),
            msg_type=MessageType.NOTIFICATION,
            payload={"level": "info", "text": "hi"},
        )
        prompt = BusQuantityPrompt(FakeBus(reply=wrong))  # type: ignore[arg-type]
        with pytest.raises(ValueError):
            await prompt.purchase(_descriptor())

    async def test_timeout_is_cancelled_by_dispatcher(self):
        bus = FakeBus(error=asyncio.TimeoutError())
        prompt = BusQuantityPrompt(bus)  # type: ignore[arg-type]
        outcome = await prompt_for_item_count(_descriptor(), prompt)
        assert isinstance(outcome, Cancelled)
