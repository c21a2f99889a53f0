"""Topic path constants and NATS subject conversion.

Topics use `/` separators (e.g., `/merchant/trade`),
while NATS uses `.` separators (e.g., `merchant.trade`).
This module handles the conversion transparently.
"""


class Topics:
    """Topic path constants."""

    # Merchant
    TRADE = "/merchant/trade"

    # Session
    NOTIFICATIONS = "/session/notifications"
    LEDGER = "/session/ledger"

    @classmethod
    def player_inbox(cls, player_id: str) -> str:
        """Return the topic where a player receives trade results."""
        return f"/player/{player_id}/inbox"

    @classmethod
    def quantity_prompt(cls, player_id: str) -> str:
        """Return the request/reply topic for a player's quantity prompts.

        Not covered by the JetStream stream: a stream capturing the subject
        would answer requests with its own publish acks.
        """
        return f"/prompt/{player_id}"


def to_nats_subject(topic: str) -> str:
    """Convert a topic path to a NATS subject.

    `/merchant/trade` → `merchant.trade`
    """
    return topic.lstrip("/").replace("/", ".")

