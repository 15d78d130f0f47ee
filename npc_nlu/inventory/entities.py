"""Actor and inventory model.

An actor is an NPC with a role (which selects its rule set and tools) and
an inventory of items it can talk about or sell.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field


ROLE_SHOPKEEPER = "shopkeeper"


@dataclass(frozen=True)
class Item:
    """An item an actor carries.

    Attributes:
        name: Display name, e.g. "Bread Loaf".
        description: One-line description.
        cost: Price in gold.
        aliases: Alternative names the item answers to.
    """

    name: str
    description: str = ""
    cost: int = 0
    aliases: tuple[str, ...] = ()

    @property
    def search_terms(self) -> tuple[str, ...]:
        """Name followed by aliases."""
        return (self.name, *self.aliases)


class Inventory:
    """Ordered, read-only collection of items."""

    def __init__(self, items: Iterable[Item] | None = None):
        self._items: tuple[Item, ...] = tuple(items or ())

    def __iter__(self) -> Iterator[Item]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index: int) -> Item:
        return self._items[index]


@dataclass
class Actor:
    """An NPC the player talks to.

    Attributes:
        name: Character name.
        role: Role key, e.g. "shopkeeper".
        inventory: Items the actor carries.
    """

    name: str
    role: str
    inventory: Inventory = field(default_factory=Inventory)


def general_store_items() -> list[Item]:
    """Stock for a village general store."""
    return [
        Item("Bread Loaf", "Freshly baked, still warm.", 2, ("bread", "loaf")),
        Item("Cheese Wedge", "Sharp and salty.", 3, ("cheese",)),
        Item("Healing Herbs", "Restores minor wounds.", 8, ("herbs",)),
        Item("Wool Cloak", "Warm and sturdy.", 15, ("cloak",)),
        Item("Rope (20 ft)", "Strong hemp rope.", 10, ("rope",)),
        Item("Small Knife", "Simple but reliable.", 6, ("knife",)),
    ]


def create_shopkeeper(name: str = "Mara", items: Iterable[Item] | None = None) -> Actor:
    """Create a shopkeeper stocked with general store items by default."""
    stock = general_store_items() if items is None else list(items)
    return Actor(name=name, role=ROLE_SHOPKEEPER, inventory=Inventory(stock))
