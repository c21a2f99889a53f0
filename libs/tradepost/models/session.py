"""Session models — actors, their tokens, and the items they own."""

from enum import StrEnum

from pydantic import BaseModel, Field


class ActorKind(StrEnum):
    PLAYER = "player"
    MERCHANT = "merchant"


class ItemType(StrEnum):
    """Item types known to the session."""

    WEAPON = "weapon"
    EQUIPMENT = "equipment"
    CONSUMABLE = "consumable"
    TOOL = "tool"
    LOOT = "loot"
    BACKPACK = "backpack"


class Token(BaseModel):
    """The actor's token on the scene.

    `actor_link` is True when the token shares its data record with the
    actor, so changes made through the token persist on the actor.
    """

    actor_link: bool = False


class Actor(BaseModel):
    """A player character or merchant taking part in the session."""

    id: str
    name: str
    kind: ActorKind = ActorKind.PLAYER
    currency: dict[str, int] = Field(default_factory=dict)  # coin -> count
    token: Token = Field(default_factory=Token)


class Item(BaseModel):
    """An item owned by exactly one actor."""

    id: str
    name: str
    type: ItemType = ItemType.LOOT
    owner_id: str
    price: float | str | None = None  # per unit; bare numbers are gold
    quantity: int = Field(default=1, ge=1)  # emptied stacks are removed, never kept at 0


class SessionSnapshot(BaseModel):
    """Serialized session contents used to seed the merchant service."""

    actors: list[Actor] = Field(default_factory=list)
    items: list[Item] = Field(default_factory=list)
