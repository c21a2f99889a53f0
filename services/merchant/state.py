"""In-memory session state for the Merchant service.

Holds the actors taking part in the session and the items they own.
State is seeded from a snapshot file; nothing is written back.
"""

import uuid
from dataclasses import dataclass, field
from pathlib import Path

from tradepost import COIN_VALUES, Actor, Item, SessionSnapshot, can_stack, currency
from tradepost.models.currency import CurrencyAmount


class TradeError(ValueError):
    """A transfer could not be applied to the session state."""


@dataclass
class SessionState:
    """Tracks actors and items for one game session."""

    _actors: dict[str, Actor] = field(default_factory=dict)
    _items: dict[str, Item] = field(default_factory=dict)

    @classmethod
    def from_snapshot(cls, snapshot: SessionSnapshot) -> "SessionState":
        state = cls()
        for actor in snapshot.actors:
            state.add_actor(actor)
        for item in snapshot.items:
            state.add_item(item)
        return state

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            actors=list(self._actors.values()),
            items=list(self._items.values()),
        )

    # --- Actors ---

    def add_actor(self, actor: Actor) -> None:
        self._actors[actor.id] = actor

    def get_actor(self, actor_id: str) -> Actor | None:
        return self._actors.get(actor_id)

    # --- Items ---

    def add_item(self, item: Item) -> None:
        self._items[item.id] = item

    def get_item(self, item_id: str) -> Item | None:
        return self._items.get(item_id)

    def items_owned_by(self, actor_id: str) -> list[Item]:
        """Return every item an actor currently owns."""
        return [item for item in self._items.values() if item.owner_id == actor_id]

    # --- Currency ---

    def debit_currency(self, actor_id: str, amount: CurrencyAmount) -> None:
        """Take an amount from an actor, making change in gp/sp/cp.

        Holdings keys that are not coins are kept as they are.

        Raises:
            TradeError: If the actor is unknown or cannot afford the amount.
        """
        actor = self._require_actor(actor_id)
        balance = currency.from_actor(actor)
        if not currency.is_at_least(balance, amount):
            raise TradeError(
                f"Actor '{actor_id}' has insufficient funds: "
                f"needs {currency.to_string(amount)}, has {currency.to_string(balance)}"
            )
        _set_balance(actor, CurrencyAmount(copper=balance.copper - amount.copper))

    def credit_currency(self, actor_id: str, amount: CurrencyAmount) -> None:
        """Give an amount to an actor."""
        actor = self._require_actor(actor_id)
        balance = currency.from_actor(actor)
        _set_balance(actor, CurrencyAmount(copper=balance.copper + amount.copper))

    # --- Item ownership ---

    def move_item(self, item_id: str, to_actor_id: str, count: int | None = None) -> Item:
        """Move an item, or `count` units of a stack, to another actor.

        Units land on a matching stack the recipient already holds when
        there is one: same stackable type, name and recorded unit price.
        Returns the recipient's item record.

        Raises:
            TradeError: If the item or recipient is unknown, or `count`
                is outside 1..quantity.
        """
        item = self._items.get(item_id)
        if item is None:
            raise TradeError(f"Item '{item_id}' not found")
        self._require_actor(to_actor_id)

        quantity = item.quantity if count is None else count
        if count is not None and not 1 <= count <= item.quantity:
            raise TradeError(
                f"Cannot move {count} of '{item.name}': only {item.quantity} available"
            )

        existing = self._matching_stack(item, to_actor_id)
        if count is None or count == item.quantity:
            if existing is None:
                item.owner_id = to_actor_id
                return item
            existing.quantity += quantity
            del self._items[item.id]
            return existing

        item.quantity -= quantity
        if existing is not None:
            existing.quantity += quantity
            return existing
        split = item.model_copy(
            update={"id": str(uuid.uuid4()), "owner_id": to_actor_id, "quantity": quantity}
        )
        self._items[split.id] = split
        return split

    def _matching_stack(self, item: Item, actor_id: str) -> Item | None:
        if not can_stack(item):
            return None
        for other in self._items.values():
            if (
                other.id != item.id
                and other.owner_id == actor_id
                and other.name == item.name
                and other.type == item.type
                and other.price == item.price
            ):
                return other
        return None

    def _require_actor(self, actor_id: str) -> Actor:
        actor = self._actors.get(actor_id)
        if actor is None:
            raise TradeError(f"Actor '{actor_id}' not found")
        return actor


def _set_balance(actor: Actor, amount: CurrencyAmount) -> None:
    other = {key: count for key, count in actor.currency.items() if key not in COIN_VALUES}
    actor.currency = {**currency.to_holdings(amount), **other}


def load_snapshot(path: str | Path) -> SessionState:
    """Build a SessionState from a snapshot JSON file."""
    data = Path(path).read_text(encoding="utf-8")
    return SessionState.from_snapshot(SessionSnapshot.model_validate_json(data))
