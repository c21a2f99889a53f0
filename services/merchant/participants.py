"""Resolve the actors and item taking part in a trade."""

from dataclasses import dataclass

from tradepost import Actor, Direction, Item

from services.merchant.state import SessionState


class ParticipantError(LookupError):
    """A trade names an actor or item that cannot be resolved."""


@dataclass(frozen=True)
class Participants:
    player: Actor
    merchant: Actor
    item: Item


def resolve_participants(
    state: SessionState,
    *,
    direction: Direction,
    item_id: str,
    player_id: str,
    merchant_id: str,
) -> Participants:
    """Look up player, merchant and item for a trade.

    The item must belong to the side giving it up: the merchant for
    `to-player`, the player for `from-player`.

    Raises:
        ParticipantError: If any id is unknown or the item has the wrong owner.
    """
    player = state.get_actor(player_id)
    if player is None:
        raise ParticipantError(f"Player '{player_id}' not found")

    merchant = state.get_actor(merchant_id)
    if merchant is None:
        raise ParticipantError(f"Merchant '{merchant_id}' not found")

    item = state.get_item(item_id)
    if item is None:
        raise ParticipantError(f"Item '{item_id}' not found")

    owner = merchant if direction == Direction.TO_PLAYER else player
    if item.owner_id != owner.id:
        raise ParticipantError(
            f"Item '{item.name}' ({item_id}) is not owned by '{owner.name}'"
        )

    return Participants(player=player, merchant=merchant, item=item)
