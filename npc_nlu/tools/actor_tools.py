"""Deterministic tools a shopkeeper runs for classified intents.

Tool output is plain, structured text meant to be handed to a narration
layer as facts, not shown to the player verbatim.
"""

import logging

from npc_nlu.intent.rules import ITEM_DESCRIBE, SHOP_INVENTORY_LIST
from npc_nlu.inventory.entities import Actor, Item
from npc_nlu.tools.tool_types import ToolDefinition, ToolInvocationContext, ToolParameter

logger = logging.getLogger(__name__)


class ShopInventoryTool:
    """Lists the items an actor has for sale, with prices."""

    NAME = "list_shop_inventory"

    definition = ToolDefinition(
        name=NAME,
        description="List all items currently for sale in the shop, including prices.",
        intent=SHOP_INVENTORY_LIST,
    )

    def __init__(self, actor: Actor):
        self.actor = actor

    @property
    def name(self) -> str:
        return self.definition.name

    @property
    def intent(self) -> str:
        return self.definition.intent

    def invoke(self, context: ToolInvocationContext) -> str:
        if len(self.actor.inventory) == 0:
            return "No items are currently for sale."

        lines = [
            f"{i}. {item.name} - {item.cost} gold"
            for i, item in enumerate(self.actor.inventory, start=1)
        ]
        return "\n".join(lines)


class DescribeItemTool:
    """Describes the items the player asked about."""

    NAME = "describe_item"
    NOTHING_LIKE_THAT = "You don't carry anything like that."

    definition = ToolDefinition(
        name=NAME,
        description="Describe one or more items currently for sale.",
        intent=ITEM_DESCRIBE,
        parameters=(
            ToolParameter(
                name="item_name",
                type="string",
                description="Name of the item the customer asked about",
            ),
        ),
    )

    def __init__(self, actor: Actor):
        self.actor = actor

    @property
    def name(self) -> str:
        return self.definition.name

    @property
    def intent(self) -> str:
        return self.definition.intent

    def invoke(self, context: ToolInvocationContext) -> str:
        items = [r.item for r in context.resolved_items if r.item is not None]
        if not items:
            return self.NOTHING_LIKE_THAT
        return " ".join(self._describe(item) for item in items)

    @staticmethod
    def _describe(item: Item) -> str:
        return f"{item.name}: {item.description} Costs {item.cost}."
