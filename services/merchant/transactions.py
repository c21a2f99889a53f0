"""Buy and sell transactions between a player and a merchant.

Each transaction resolves its participants, checks the paying side can
afford the trade, then moves the money before the item. Results come
back as a LogMessage for the player; None means the player cancelled.
"""

import logging
from dataclasses import dataclass
from typing import Protocol, assert_never

from tradepost import (
    Direction,
    Item,
    LogLevel,
    LogMessage,
    MultiTransaction,
    PurchaseRequest,
    SellRequest,
    can_stack,
    currency,
)

from services.merchant.participants import resolve_participants
from services.merchant.prompt import Cancelled, Chosen, PromptOutcome, QuantityPrompt
from services.merchant.state import SessionState
from services.merchant.trade import Trade

logger = logging.getLogger(__name__)


class Notify(Protocol):
    def info(self, text: str) -> None: ...

    def error(self, text: str) -> None: ...


@dataclass
class TransactionContext:
    """Collaborators a transaction runs against."""

    state: SessionState
    trade: Trade
    prompt: QuantityPrompt
    notifier: Notify


async def purchase(
    request: PurchaseRequest,
    source: str,
    ctx: TransactionContext,
) -> LogMessage | None:
    """Attempt to purchase an item from a merchant for a player."""
    parts = resolve_participants(
        ctx.state,
        direction=Direction.TO_PLAYER,
        item_id=request.item_id,
        player_id=request.player_id,
        merchant_id=request.merchant_id,
    )
    player, merchant, item = parts.player, parts.merchant, parts.item
    if not merchant.token.actor_link:
        ctx.notifier.error(f'remember to link actor data for merchant "{merchant.name}"')
        return LogMessage(type=LogLevel.ERROR, msg="purchase failed, please consult your DM")

    player_currency = currency.from_actor(player)
    if can_stack(item) and item.quantity > 1:
        outcome = await prompt_for_item_count(
            _descriptor(player.id, merchant.id, item, Direction.TO_PLAYER, source),
            ctx.prompt,
        )
        if isinstance(outcome, Cancelled):
            return None
        count = outcome.count
        if count > item.quantity:
            ctx.notifier.info(
                f"{player.name} attempted to purchase {item.name} ({count}) "
                f"but only has {item.quantity}"
            )
            return LogMessage(
                type=LogLevel.INFO,
                msg=f"you tried to purchase {item.name} ({count}) "
                f"but they only have {item.quantity}",
            )
        price = currency.multiply(count, currency.from_item(item))
        if currency.is_at_least(player_currency, price):
            await ctx.trade.currency(from_actor=player, to_actor=merchant, amount=price)
            await ctx.trade.item(from_actor=merchant, to_actor=player, item=item, count=count)
            ctx.notifier.info(
                f"{player.name} purchased {item.name} ({count}) from {merchant.name} "
                f"for {currency.to_string(price)}"
            )
            return LogMessage(
                type=LogLevel.INFO,
                msg=f"purchased {item.name} ({count}) from {merchant.name}",
            )
        ctx.notifier.info(
            f"{player.name} attempted to purchase {item.name} ({count}) from "
            f"{merchant.name} but didn't have enough currency"
        )
        return LogMessage(
            type=LogLevel.ERROR,
            msg=f"you tried to purchase {item.name} ({count}) from {merchant.name} "
            f"for {currency.to_string(price)} but didn't have enough",
        )

    price = currency.from_item(item)
    if currency.is_at_least(player_currency, price):
        await ctx.trade.currency(from_actor=player, to_actor=merchant, amount=price)
        await ctx.trade.item(from_actor=merchant, to_actor=player, item=item)
        ctx.notifier.info(
            f"{player.name} purchased {item.name} from {merchant.name} "
            f"for {currency.to_string(price)}"
        )
        return LogMessage(
            type=LogLevel.INFO,
            msg=f"purchased {item.name} from {merchant.name} for {currency.to_string(price)}",
        )
    ctx.notifier.info(
        f"{player.name} attempted to purchase {item.name} from {merchant.name} "
        f"but didn't have enough currency"
    )
    return LogMessage(
        type=LogLevel.ERROR,
        msg="you don't have enough currency to make this purchase",
    )


async def sell(
    request: SellRequest,
    source: str,
    ctx: TransactionContext,
) -> LogMessage | None:
    """Attempt to sell a player's item to a merchant."""
    parts = resolve_participants(
        ctx.state,
        direction=Direction.FROM_PLAYER,
        item_id=request.item_id,
        player_id=request.player_id,
        merchant_id=request.merchant_id,
    )
    player, merchant, item = parts.player, parts.merchant, parts.item
    if not merchant.token.actor_link:
        ctx.notifier.error(f'remember to link actor data for merchant "{merchant.name}"')
        return LogMessage(type=LogLevel.ERROR, msg="sale failed, please consult your DM")

    merchant_currency = currency.from_actor(merchant)
    if can_stack(item) and item.quantity > 1:
        outcome = await prompt_for_item_count(
            _descriptor(player.id, merchant.id, item, Direction.FROM_PLAYER, source),
            ctx.prompt,
        )
        if isinstance(outcome, Cancelled):
            return None
        count = outcome.count
        if count > item.quantity:
            ctx.notifier.info(
                f"{player.name} attempted to sell {item.name} ({count}) "
                f"but only has {item.quantity}"
            )
            return LogMessage(
                type=LogLevel.INFO,
                msg=f"you tried to sell {item.name} ({count}) "
                f"but you only have {item.quantity}",
            )
        price = currency.multiply(count, currency.from_item(item))
        if currency.is_at_least(merchant_currency, price):
            await ctx.trade.currency(from_actor=merchant, to_actor=player, amount=price)
            await ctx.trade.item(from_actor=player, to_actor=merchant, item=item, count=count)
            ctx.notifier.info(
                f"{player.name} sold {item.name} ({count}) to {merchant.name} "
                f"for {currency.to_string(price)}"
            )
            return LogMessage(
                type=LogLevel.INFO,
                msg=f"sold {item.name} ({count}) to {merchant.name}",
            )
        ctx.notifier.info(
            f"{player.name} attempted to sell {item.name} ({count}) but "
            f"{merchant.name} didn't have enough currency"
        )
        return LogMessage(
            type=LogLevel.ERROR,
            msg=f"you tried to sell {item.name} ({count}) for {currency.to_string(price)} "
            f"but {merchant.name} doesn't have enough",
        )

    price = currency.from_item(item)
    if currency.is_at_least(merchant_currency, price):
        await ctx.trade.currency(from_actor=merchant, to_actor=player, amount=price)
        await ctx.trade.item(from_actor=player, to_actor=merchant, item=item)
        ctx.notifier.info(
            f"{player.name} sold {item.name} to {merchant.name} "
            f"for {currency.to_string(price)}"
        )
        return LogMessage(
            type=LogLevel.INFO,
            msg=f"sold {item.name} to {merchant.name} for {currency.to_string(price)}",
        )
    ctx.notifier.info(
        f"{player.name} attempted to sell {item.name} but {merchant.name} "
        f"didn't have enough currency"
    )
    return LogMessage(
        type=LogLevel.ERROR,
        msg=f"attempted to sell {item.name} for {currency.to_string(price)} "
        f"but {merchant.name} doesn't have enough currency",
    )


async def prompt_for_item_count(
    descriptor: MultiTransaction,
    prompt: QuantityPrompt,
) -> PromptOutcome:
    """Ask the player how many units to trade.

    Never raises: any failure of the prompt, including the player
    dismissing it, comes back as Cancelled. So does a count below one.
    """
    match descriptor.direction:
        case Direction.FROM_PLAYER:
            ask = prompt.sell
        case Direction.TO_PLAYER:
            ask = prompt.purchase
        case _:
            assert_never(descriptor.direction)

    try:
        count = await ask(descriptor)
    except Exception as e:
        logger.debug("Quantity prompt for %s ended: %r", descriptor.player_id, e)
        return Cancelled(reason=str(e) or type(e).__name__)

    if count < 1:
        return Cancelled(reason=f"non-positive count {count}")
    return Chosen(count=count)


def _descriptor(
    player_id: str,
    merchant_id: str,
    item: Item,
    direction: Direction,
    source: str,
) -> MultiTransaction:
    return MultiTransaction(
        player_id=player_id,
        merchant_id=merchant_id,
        item_id=item.id,
        direction=direction,
        target=source,
        item_name=item.name,
        available=item.quantity,
        unit_price=currency.to_string(currency.from_item(item)),
    )
