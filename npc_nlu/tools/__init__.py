"""Typed actor tools bound to intents."""

from npc_nlu.tools.actor_tools import DescribeItemTool, ShopInventoryTool
from npc_nlu.tools.factory import ToolFactory, facts_for_turn, tools_for_intents
from npc_nlu.tools.tool_types import (
    ActorTool,
    ToolDefinition,
    ToolInvocationContext,
    ToolParameter,
)

__all__ = [
    "ActorTool",
    "DescribeItemTool",
    "ShopInventoryTool",
    "ToolDefinition",
    "ToolFactory",
    "ToolInvocationContext",
    "ToolParameter",
    "facts_for_turn",
    "tools_for_intents",
]
