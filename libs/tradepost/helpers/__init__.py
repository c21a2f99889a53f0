from tradepost.helpers.factory import create_message, parse_payload
from tradepost.helpers.items import STACKABLE_TYPES, can_stack
from tradepost.helpers.validation import validate_message

__all__ = [
    "STACKABLE_TYPES",
    "can_stack",
    "create_message",
    "parse_payload",
    "validate_message",
]
