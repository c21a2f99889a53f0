"""Currency amounts — coin holdings, item prices, and display text.

Every amount is held canonically in copper pieces. One silver is worth
10 copper, one electrum 50, one gold 100 and one platinum 1000.
"""

import re
from collections.abc import Mapping
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class Denomination(StrEnum):
    """Coin types an actor can hold."""

    PP = "pp"
    GP = "gp"
    EP = "ep"
    SP = "sp"
    CP = "cp"


# Value of each coin in copper pieces
COIN_VALUES: dict[Denomination, int] = {
    Denomination.PP: 1000,
    Denomination.GP: 100,
    Denomination.EP: 50,
    Denomination.SP: 10,
    Denomination.CP: 1,
}

# Coins used when making change and rendering text
_CHANGE_COINS = (Denomination.GP, Denomination.SP, Denomination.CP)

_PRICE_TOKEN = re.compile(r"(\d+(?:\.\d+)?)\s*(pp|gp|ep|sp|cp)?", re.IGNORECASE)


class CurrencyAmount(BaseModel):
    """A non-negative amount of money, in copper pieces."""

    copper: int = Field(default=0, ge=0)

    model_config = {"frozen": True}

    def __ge__(self, other: "CurrencyAmount") -> bool:
        return self.copper >= other.copper

    def __gt__(self, other: "CurrencyAmount") -> bool:
        return self.copper > other.copper

    def __le__(self, other: "CurrencyAmount") -> bool:
        return self.copper <= other.copper

    def __lt__(self, other: "CurrencyAmount") -> bool:
        return self.copper < other.copper

    def __str__(self) -> str:
        return to_string(self)


def from_holdings(holdings: Mapping[str, Any] | None) -> CurrencyAmount:
    """Sum a mapping of coin counts (e.g. ``{"gp": 5, "sp": 3}``).

    Unknown keys are ignored.

    Raises:
        ValueError: If any coin count is negative.
    """
    if not holdings:
        return CurrencyAmount()
    total = 0
    for coin, value in COIN_VALUES.items():
        count = int(holdings.get(coin, 0) or 0)
        if count < 0:
            raise ValueError(f"Negative coin count for {coin}: {count}")
        total += count * value
    return CurrencyAmount(copper=total)


def from_actor(actor: Any) -> CurrencyAmount:
    """Return the total value of an actor's coin holdings."""
    return from_holdings(actor.currency)


def parse_price(value: float | int | str | None) -> CurrencyAmount:
    """Parse an item price into a CurrencyAmount.

    A bare number is read as gold pieces. Strings may carry one or more
    ``<number> <coin>`` parts, e.g. ``"1 gp 5 sp"``.

    Raises:
        ValueError: If the price is negative or cannot be parsed.
    """
    if value is None:
        return CurrencyAmount()
    if isinstance(value, bool):
        raise ValueError(f"Invalid price: {value!r}")
    if isinstance(value, (int, float)):
        if value < 0:
            raise ValueError(f"Negative price: {value!r}")
        return CurrencyAmount(copper=round(value * COIN_VALUES[Denomination.GP]))

    text = value.strip()
    if not text:
        return CurrencyAmount()

    total = 0.0
    pos = 0
    for match in _PRICE_TOKEN.finditer(text):
        # Only whitespace or commas may sit between price parts
        if text[pos:match.start()].strip(" ,"):
            raise ValueError(f"Invalid price: {value!r}")
        amount = float(match.group(1))
        coin = Denomination((match.group(2) or "gp").lower())
        total += amount * COIN_VALUES[coin]
        pos = match.end()
    if pos == 0 or text[pos:].strip(" ,"):
        raise ValueError(f"Invalid price: {value!r}")
    return CurrencyAmount(copper=round(total))


def from_item(item: Any) -> CurrencyAmount:
    """Return the unit price of an item."""
    return parse_price(item.price)


def multiply(count: int, amount: CurrencyAmount) -> CurrencyAmount:
    """Scale an amount by a unit count."""
    if count < 0:
        raise ValueError(f"Cannot multiply a price by a negative count: {count}")
    return CurrencyAmount(copper=amount.copper * count)


def is_at_least(a: CurrencyAmount, b: CurrencyAmount) -> bool:
    """Return True when ``a`` is worth at least ``b``."""
    return a.copper >= b.copper


def to_holdings(amount: CurrencyAmount) -> dict[str, int]:
    """Break an amount down into gold, silver and copper pieces."""
    remaining = amount.copper
    holdings: dict[str, int] = {}
    for coin in _CHANGE_COINS:
        holdings[coin.value], remaining = divmod(remaining, COIN_VALUES[coin])
    return holdings


def to_string(amount: CurrencyAmount) -> str:
    """Render an amount for display, e.g. ``"30 gp 5 sp"``."""
    parts = [
        f"{count} {coin}"
        for coin, count in to_holdings(amount).items()
        if count
    ]
    if not parts:
        return "0 gp"
    return " ".join(parts)
