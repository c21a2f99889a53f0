"""Quantity prompts — ask a player how many units of a stack to trade."""

import logging
from dataclasses import dataclass
from typing import Protocol

from tradepost import (
    MessageType,
    MultiTransaction,
    QuantityReply,
    SessionBusClient,
    Topics,
    create_message,
    parse_payload,
)

logger = logging.getLogger(__name__)


class PromptCancelled(Exception):
    """The player dismissed a quantity prompt."""


@dataclass(frozen=True)
class Chosen:
    """The player picked a quantity."""

    count: int


@dataclass(frozen=True)
class Cancelled:
    """The prompt ended without a quantity."""

    reason: str = ""


PromptOutcome = Chosen | Cancelled


class QuantityPrompt(Protocol):
    """Interactive quantity dialog, one flavor per trade direction.

    Both methods return the chosen count and raise on cancel or failure.
    """

    async def purchase(self, descriptor: MultiTransaction) -> int: ...

    async def sell(self, descriptor: MultiTransaction) -> int: ...


class BusQuantityPrompt:
    """Asks the player's client over the bus and waits for the reply."""

    AGENT_ID = "merchant"

    def __init__(self, bus: SessionBusClient, timeout: float = 60.0) -> None:
        self._bus = bus
        self._timeout = timeout

    async def purchase(self, descriptor: MultiTransaction) -> int:
        return await self._ask(descriptor)

    async def sell(self, descriptor: MultiTransaction) -> int:
        return await self._ask(descriptor)

    async def _ask(self, descriptor: MultiTransaction) -> int:
        topic = Topics.quantity_prompt(descriptor.player_id)
        msg = create_message(
            from_agent=self.AGENT_ID,
            topic=topic,
            msg_type=MessageType.QUANTITY_PROMPT,
            payload=descriptor,
        )
        reply = await self._bus.request(topic, msg, timeout=self._timeout)
        answer = parse_payload(reply)
        if not isinstance(answer, QuantityReply):
            raise ValueError(f"Unexpected reply type: {reply.type}")
        if answer.cancelled:
            raise PromptCancelled(f"{descriptor.player_id} dismissed the prompt")
        logger.debug(
            "%s chose %d of %s", descriptor.player_id, answer.count, descriptor.item_id
        )
        return answer.count
