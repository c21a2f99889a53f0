"""Message types and payload models for the Tradepost protocol."""

from enum import StrEnum

from pydantic import BaseModel, Field


class MessageType(StrEnum):
    """All message types in the protocol."""

    PURCHASE = "purchase"
    SELL = "sell"
    QUANTITY_PROMPT = "quantity_prompt"
    QUANTITY_REPLY = "quantity_reply"
    TRANSACTION_RESULT = "transaction_result"
    NOTIFICATION = "notification"
    CURRENCY_TRANSFER = "currency_transfer"
    ITEM_TRANSFER = "item_transfer"


class Direction(StrEnum):
    """Which way the item moves in a trade."""

    TO_PLAYER = "to-player"  # purchase
    FROM_PLAYER = "from-player"  # sale


class LogLevel(StrEnum):
    INFO = "info"
    ERROR = "error"


class TransactionRequest(BaseModel):
    """A player asks to trade one item with a merchant."""

    player_id: str
    merchant_id: str
    item_id: str
    source: str | None = None  # where the request came from (sheet, chat, ...)


class PurchaseRequest(TransactionRequest):
    """Player buys an item from a merchant."""


class SellRequest(TransactionRequest):
    """Player sells an item to a merchant."""


class MultiTransaction(BaseModel):
    """Parameters for a quantity prompt on a stacked item."""

    player_id: str
    merchant_id: str
    item_id: str
    direction: Direction
    target: str
    item_name: str = ""
    available: int = Field(default=0, ge=0)
    unit_price: str = ""


class QuantityReply(BaseModel):
    """The player's answer to a quantity prompt."""

    count: int = 0
    cancelled: bool = False


class LogMessage(BaseModel):
    """Outcome of a trade, shown to the player."""

    type: LogLevel
    msg: str


class Notification(BaseModel):
    """Session-wide notice about a trade."""

    level: LogLevel
    text: str


class CurrencyTransfer(BaseModel):
    """Ledger entry: money moved between two actors."""

    from_actor: str
    to_actor: str
    copper: int = Field(ge=0)


class ItemTransfer(BaseModel):
    """Ledger entry: an item (or part of a stack) changed hands."""

    from_actor: str
    to_actor: str
    item_id: str
    item_name: str
    quantity: int = Field(gt=0)


# Registry mapping message types to their payload models
PAYLOAD_REGISTRY: dict[MessageType, type[BaseModel]] = {
    MessageType.PURCHASE: PurchaseRequest,
    MessageType.SELL: SellRequest,
    MessageType.QUANTITY_PROMPT: MultiTransaction,
    MessageType.QUANTITY_REPLY: QuantityReply,
    MessageType.TRANSACTION_RESULT: LogMessage,
    MessageType.NOTIFICATION: Notification,
    MessageType.CURRENCY_TRANSFER: CurrencyTransfer,
    MessageType.ITEM_TRANSFER: ItemTransfer,
}
