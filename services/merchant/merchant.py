"""MerchantService — subscribes to trade requests and settles them."""

import logging

from tradepost import (
    Envelope,
    LogMessage,
    MessageType,
    PurchaseRequest,
    SellRequest,
    SessionBusClient,
    Topics,
    create_message,
    parse_payload,
    validate_message,
)

from services.merchant.notify import Notifier
from services.merchant.prompt import BusQuantityPrompt
from services.merchant.state import SessionState
from services.merchant.trade import Trade
from services.merchant.transactions import TransactionContext, purchase, sell

logger = logging.getLogger(__name__)


class MerchantService:
    """Runs every merchant in the session.

    It subscribes to `/merchant/trade` for purchase and sell requests,
    prompts players for stack quantities over the bus, applies transfers
    to the session state and publishes each result to the player's inbox.
    """

    AGENT_ID = "merchant"
    # Extra seconds on top of the prompt timeout before JetStream redelivers a request
    ACK_GRACE = 30.0

    def __init__(
        self,
        nats_url: str = "nats://localhost:4222",
        state: SessionState | None = None,
        prompt_timeout: float = 60.0,
    ) -> None:
        self._bus = SessionBusClient(nats_url)
        self._state = state if state is not None else SessionState()
        self._ack_wait = prompt_timeout + self.ACK_GRACE
        self._notifier = Notifier(self._bus)
        self._ctx = TransactionContext(
            state=self._state,
            trade=Trade(self._state, self._bus),
            prompt=BusQuantityPrompt(self._bus, timeout=prompt_timeout),
            notifier=self._notifier,
        )

    @property
    def state(self) -> SessionState:
        """Expose state for testing."""
        return self._state

    async def start(self) -> None:
        """Connect to NATS and start listening."""
        await self._bus.connect()
        logger.info("Merchant connected to NATS")

        await self._bus.subscribe(Topics.TRADE, self._on_trade_request, ack_wait=self._ack_wait)
        logger.info("Merchant subscribed to %s", Topics.TRADE)

    async def stop(self) -> None:
        """Clean shutdown."""
        await self._notifier.flush()
        await self._bus.close()
        logger.info("Merchant stopped")

    async def _on_trade_request(self, envelope: Envelope) -> None:
        """Handle an incoming purchase or sell request.

        Malformed requests are logged and dropped. Unresolvable
        participants raise out of here; the bus client logs them.
        """
        if envelope.type not in (MessageType.PURCHASE, MessageType.SELL):
            return

        errors = validate_message(envelope)
        if errors:
            logger.warning(
                "Rejected %s from %s: %s", envelope.type, envelope.from_agent, "; ".join(errors)
            )
            return

        request = parse_payload(envelope)
        if not isinstance(request, PurchaseRequest | SellRequest):
            return
        source = request.source or envelope.from_agent
        if isinstance(request, PurchaseRequest):
            result = await purchase(request, source, self._ctx)
        else:
            result = await sell(request, source, self._ctx)

        if result is None:
            logger.info(
                "%s from %s cancelled by player", envelope.type, request.player_id
            )
            return
        await self._publish_result(request.player_id, result)

    async def _publish_result(self, player_id: str, result: LogMessage) -> None:
        """Publish a transaction result to the player's inbox."""
        topic = Topics.player_inbox(player_id)
        msg = create_message(
            from_agent=self.AGENT_ID,
            topic=topic,
            msg_type=MessageType.TRANSACTION_RESULT,
            payload=result,
        )
        await self._bus.publish(topic, msg)
        logger.info("[%s] %s: %s", player_id, result.type, result.msg)
