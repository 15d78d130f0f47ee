"""Actors, inventories and item resolution."""

from npc_nlu.inventory.entities import (
    ROLE_SHOPKEEPER,
    Actor,
    Inventory,
    Item,
    create_shopkeeper,
    general_store_items,
)
from npc_nlu.inventory.resolver import (
    ARTICLES,
    ItemResolutionResult,
    ItemResolutionStatus,
    ItemResolver,
    levenshtein,
    strip_articles,
)

__all__ = [
    "ARTICLES",
    "ROLE_SHOPKEEPER",
    "Actor",
    "Inventory",
    "Item",
    "ItemResolutionResult",
    "ItemResolutionStatus",
    "ItemResolver",
    "create_shopkeeper",
    "general_store_items",
    "levenshtein",
    "strip_articles",
]
