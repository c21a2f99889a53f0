from tradepost.models.currency import COIN_VALUES, CurrencyAmount, Denomination
from tradepost.models.envelope import Envelope
from tradepost.models.messages import (
    PAYLOAD_REGISTRY,
    CurrencyTransfer,
    Direction,
    ItemTransfer,
    LogLevel,
    LogMessage,
    MessageType,
    MultiTransaction,
    Notification,
    PurchaseRequest,
    QuantityReply,
    SellRequest,
    TransactionRequest,
)
from tradepost.models.session import (
    Actor,
    ActorKind,
    Item,
    ItemType,
    SessionSnapshot,
    Token,
)
from tradepost.models.topics import Topics, to_nats_subject

__all__ = [
    "Actor",
    "ActorKind",
    "COIN_VALUES",
    "CurrencyAmount",
    "CurrencyTransfer",
    "Denomination",
    "Direction",
    "Envelope",
    "Item",
    "ItemTransfer",
    "ItemType",
    "LogLevel",
    "LogMessage",
    "MessageType",
    "MultiTransaction",
    "Notification",
    "PAYLOAD_REGISTRY",
    "PurchaseRequest",
    "QuantityReply",
    "SellRequest",
    "SessionSnapshot",
    "Token",
    "Topics",
    "TransactionRequest",
    "to_nats_subject",
]
