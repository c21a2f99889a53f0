"""Trade primitives — move currency and items between actors.

Each primitive applies its change to the session state and, when a bus
is attached, records it on the session ledger topic.
"""

import logging

from tradepost import (
    Actor,
    CurrencyTransfer,
    Item,
    ItemTransfer,
    MessageType,
    SessionBusClient,
    Topics,
    create_message,
    currency,
)
from tradepost.models.currency import CurrencyAmount

from services.merchant.state import SessionState, TradeError

logger = logging.getLogger(__name__)


class Trade:
    """Applies transfers to a SessionState."""

    AGENT_ID = "merchant"

    def __init__(self, state: SessionState, bus: SessionBusClient | None = None) -> None:
        self._state = state
        self._bus = bus

    async def currency(
        self,
        *,
        from_actor: Actor,
        to_actor: Actor,
        amount: CurrencyAmount,
    ) -> None:
        """Move money between two actors.

        Raises:
            TradeError: If the payer cannot cover the amount.
        """
        self._state.debit_currency(from_actor.id, amount)
        self._state.credit_currency(to_actor.id, amount)
        logger.info(
            "Moved %s from %s to %s",
            currency.to_string(amount),
            from_actor.name,
            to_actor.name,
        )
        await self._record(
            MessageType.CURRENCY_TRANSFER,
            CurrencyTransfer(
                from_actor=from_actor.id,
                to_actor=to_actor.id,
                copper=amount.copper,
            ),
        )

    async def item(
        self,
        *,
        from_actor: Actor,
        to_actor: Actor,
        item: Item,
        count: int | None = None,
    ) -> None:
        """Move an item between two actors. `count=None` moves all of it.

        Raises:
            TradeError: If the item is not held by `from_actor` or the
                count cannot be taken from the stack.
        """
        if item.owner_id != from_actor.id:
            raise TradeError(f"'{item.name}' is not held by '{from_actor.name}'")

        quantity = item.quantity if count is None else count
        self._state.move_item(item.id, to_actor.id, count)
        logger.info(
            "Moved %s (%d) from %s to %s",
            item.name,
            quantity,
            from_actor.name,
            to_actor.name,
        )
        await self._record(
            MessageType.ITEM_TRANSFER,
            ItemTransfer(
                from_actor=from_actor.id,
                to_actor=to_actor.id,
                item_id=item.id,
                item_name=item.name,
                quantity=quantity,
            ),
        )

    async def _record(self, msg_type: MessageType, payload: CurrencyTransfer | ItemTransfer) -> None:
        if self._bus is None:
            return
        msg = create_message(
            from_agent=self.AGENT_ID,
            topic=Topics.LEDGER,
            msg_type=msg_type,
            payload=payload,
        )
        await self._bus.publish(Topics.LEDGER, msg)
