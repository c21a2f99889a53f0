"""ShopperAgent — a player client that answers merchant quantity prompts."""

import logging

from tradepost import (
    Envelope,
    ItemTransfer,
    LogMessage,
    MessageType,
    MultiTransaction,
    PurchaseRequest,
    QuantityReply,
    SellRequest,
    SessionBusClient,
    Topics,
    create_message,
    parse_payload,
    validate_message,
)

from agents.shopper.state import ShopperState
from agents.shopper.strategy import decide_quantity

logger = logging.getLogger(__name__)


class ShopperAgent:
    """Trades on behalf of one player.

    Serves `/prompt/<player>` with answers from the shopper strategy,
    follows `/session/ledger` to update the wishlist, and collects trade
    results from the player's inbox.
    """

    SOURCE = "shopper"

    def __init__(
        self,
        player_id: str,
        nats_url: str = "nats://localhost:4222",
        wishlist: dict[str, int] | None = None,
        keep: dict[str, int] | None = None,
    ) -> None:
        self._client = SessionBusClient(nats_url)
        self._state = ShopperState(
            player_id=player_id,
            wishlist=dict(wishlist or {}),
            keep=dict(keep or {}),
        )

    @property
    def state(self) -> ShopperState:
        return self._state

    async def start(self) -> None:
        """Connect to NATS and start answering prompts."""
        await self._client.connect()
        player_id = self._state.player_id

        await self._client.serve(Topics.quantity_prompt(player_id), self._on_prompt)
        await self._client.subscribe(Topics.player_inbox(player_id), self._on_inbox)
        await self._client.subscribe(Topics.LEDGER, self._on_ledger)

        logger.info("Shopper for %s connected and listening", player_id)

    async def stop(self) -> None:
        await self._client.close()
        logger.info("Shopper for %s disconnected", self._state.player_id)

    async def purchase(self, merchant_id: str, item_id: str) -> None:
        """Ask a merchant to sell us an item."""
        await self._request(
            MessageType.PURCHASE,
            PurchaseRequest(
                player_id=self._state.player_id,
                merchant_id=merchant_id,
                item_id=item_id,
                source=self.SOURCE,
            ),
        )

    async def sell(self, merchant_id: str, item_id: str) -> None:
        """Offer one of our items to a merchant."""
        await self._request(
            MessageType.SELL,
            SellRequest(
                player_id=self._state.player_id,
                merchant_id=merchant_id,
                item_id=item_id,
                source=self.SOURCE,
            ),
        )

    async def _request(self, msg_type: MessageType, payload: PurchaseRequest | SellRequest) -> None:
        msg = create_message(
            from_agent=self._state.player_id,
            topic=Topics.TRADE,
            msg_type=msg_type,
            payload=payload,
        )
        await self._client.publish(Topics.TRADE, msg)
        logger.info("%s requested %s of %s", self._state.player_id, msg_type, payload.item_id)

    # --- Message handlers ---

    async def _on_prompt(self, envelope: Envelope) -> Envelope:
        """Answer a quantity prompt; anything unexpected is cancelled."""
        errors = validate_message(envelope)
        prompt = None if errors else parse_payload(envelope)
        if not isinstance(prompt, MultiTransaction):
            logger.warning(
                "%s cancelled a %s request: %s",
                self._state.player_id,
                envelope.type,
                "; ".join(errors) or "not a quantity prompt",
            )
            answer = QuantityReply(cancelled=True)
        else:
            answer = decide_quantity(prompt, self._state)
            logger.info(
                "%s answered %s prompt for %s: %s",
                self._state.player_id,
                prompt.direction,
                prompt.item_name or prompt.item_id,
                "cancel" if answer.cancelled else answer.count,
            )
        return create_message(
            from_agent=self._state.player_id,
            topic=envelope.topic,
            msg_type=MessageType.QUANTITY_REPLY,
            payload=answer,
        )

    async def _on_inbox(self, envelope: Envelope) -> None:
        if envelope.type != MessageType.TRANSACTION_RESULT:
            return
        result = LogMessage.model_validate(envelope.payload)
        self._state.results.append(result)
        logger.info("%s: [%s] %s", self._state.player_id, result.type, result.msg)

    async def _on_ledger(self, envelope: Envelope) -> None:
        if envelope.type != MessageType.ITEM_TRANSFER:
            return
        transfer = ItemTransfer.model_validate(envelope.payload)
        if transfer.to_actor == self._state.player_id:
            self._state.record_purchase(transfer.item_name, transfer.quantity)
