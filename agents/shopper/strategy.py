"""Shopper strategy — pure function, no I/O.

Purchases: take as many units as the wishlist asks for, capped at what
the merchant has. Sales: offer everything above the keep amount.
Anything else cancels the prompt.
"""

from typing import assert_never

from tradepost import Direction, MultiTransaction, QuantityReply

from agents.shopper.state import ShopperState


def decide_quantity(prompt: MultiTransaction, state: ShopperState) -> QuantityReply:
    """Answer a quantity prompt from the player's preferences."""
    match prompt.direction:
        case Direction.TO_PLAYER:
            count = min(state.wanted(prompt.item_name), prompt.available)
        case Direction.FROM_PLAYER:
            count = prompt.available - state.kept(prompt.item_name)
        case _:
            assert_never(prompt.direction)

    if count < 1:
        return QuantityReply(cancelled=True)
    return QuantityReply(count=count)
