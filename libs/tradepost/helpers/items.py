"""Item classification helpers."""

from tradepost.models.session import Item, ItemType

# Item types that can exist in quantities above one and be split
STACKABLE_TYPES: frozenset[ItemType] = frozenset({ItemType.CONSUMABLE, ItemType.LOOT})


def can_stack(item: Item) -> bool:
    """Check if an item can be traded in partial quantities."""
    return item.type in STACKABLE_TYPES
