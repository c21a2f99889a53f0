"""Envelope validation: structure, payload schema and trade routing."""

from pydantic import BaseModel, ValidationError

from tradepost.models.envelope import Envelope
from tradepost.models.messages import (
    PAYLOAD_REGISTRY,
    MessageType,
    MultiTransaction,
    TransactionRequest,
)
from tradepost.models.topics import Topics


def validate_message(envelope: Envelope) -> list[str]:
    """Validate an envelope for correctness.

    Returns a list of error strings. Empty list means valid.
    """
    errors: list[str] = []

    if not envelope.from_agent or not envelope.from_agent.strip():
        errors.append("'from' field must not be empty")

    if not envelope.topic or not envelope.topic.strip():
        errors.append("'topic' field must not be empty")

    try:
        msg_type = MessageType(envelope.type)
    except ValueError:
        errors.append(f"Unknown message type: {envelope.type}")
        return errors

    model_class = PAYLOAD_REGISTRY.get(msg_type)
    if model_class is None:
        errors.append(f"No payload schema registered for type: {msg_type}")
        return errors

    try:
        payload = model_class.model_validate(envelope.payload)
    except ValidationError as e:
        for err in e.errors():
            loc = ".".join(str(x) for x in err["loc"])
            errors.append(f"payload.{loc}: {err['msg']}")
        return errors

    errors.extend(_routing_errors(envelope, payload))
    return errors


def _routing_errors(envelope: Envelope, payload: BaseModel) -> list[str]:
    errors: list[str] = []
    if isinstance(payload, TransactionRequest):
        if envelope.topic != Topics.TRADE:
            errors.append(f"{envelope.type} requests belong on {Topics.TRADE}, not {envelope.topic}")
        if payload.player_id == payload.merchant_id:
            errors.append("player and merchant must be different actors")
    elif isinstance(payload, MultiTransaction):
        expected = Topics.quantity_prompt(payload.player_id)
        if envelope.topic != expected:
            errors.append(f"quantity prompt for {payload.player_id} belongs on {expected}")
    return errors
