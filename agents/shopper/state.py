"""ShopperState — what a player wants to buy, keep, and has heard back."""

from dataclasses import dataclass, field

from tradepost import LogMessage


@dataclass
class ShopperState:
    """Local preferences and trade history for one player."""

    player_id: str
    wishlist: dict[str, int] = field(default_factory=dict)  # item name -> units wanted
    keep: dict[str, int] = field(default_factory=dict)  # item name -> units never sold
    results: list[LogMessage] = field(default_factory=list)

    def wanted(self, item_name: str) -> int:
        return self.wishlist.get(item_name, 0)

    def kept(self, item_name: str) -> int:
        return self.keep.get(item_name, 0)

    def record_purchase(self, item_name: str, quantity: int) -> None:
        """Reduce the wishlist after units were bought."""
        remaining = self.wanted(item_name) - quantity
        if remaining > 0:
            self.wishlist[item_name] = remaining
        else:
            self.wishlist.pop(item_name, None)
