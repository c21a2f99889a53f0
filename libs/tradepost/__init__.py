"""Tradepost — shared protocol library for merchant trading."""

from tradepost.client.nats_client import SessionBusClient
from tradepost.helpers.factory import create_message, parse_payload
from tradepost.helpers.items import STACKABLE_TYPES, can_stack
from tradepost.helpers.validation import validate_message
from tradepost.models import currency
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
    # Client
    "SessionBusClient",
    # Models
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
    # Helpers
    "STACKABLE_TYPES",
    "can_stack",
    "create_message",
    "currency",
    "parse_payload",
    "to_nats_subject",
    "validate_message",
]
