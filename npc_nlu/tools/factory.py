"""Tool registry and per-turn tool execution.

``facts_for_turn`` is the glue between classification and narration: it
resolves item slots, runs the tools bound to the turn's intents and returns
the "FACT:" lines a narrator is allowed to rely on.
"""

import logging
from collections.abc import Callable, Iterable

from npc_nlu.exceptions import ToolNotFoundError
from npc_nlu.intent.engine import IntentEngineResult
from npc_nlu.intent.facts import Intent
from npc_nlu.inventory.entities import Actor
from npc_nlu.inventory.resolver import (
    ItemResolutionResult,
    ItemResolutionStatus,
    ItemResolver,
)
from npc_nlu.tools.actor_tools import DescribeItemTool, ShopInventoryTool
from npc_nlu.tools.tool_types import ActorTool, ToolInvocationContext

logger = logging.getLogger(__name__)

ITEM_SLOT = "item_name"


class ToolFactory:
    """Creates actor tools by name."""

    def __init__(self) -> None:
        self._registry: dict[str, Callable[[Actor], ActorTool]] = {
            ShopInventoryTool.NAME: ShopInventoryTool,
            DescribeItemTool.NAME: DescribeItemTool,
        }

    def register(self, name: str, constructor: Callable[[Actor], ActorTool]) -> None:
        self._registry[name] = constructor

    def names(self) -> list[str]:
        return list(self._registry)

    def create(self, name: str, actor: Actor) -> ActorTool:
        """Create one tool bound to an actor.

        Raises:
            ToolNotFoundError: If no tool is registered under the name.
        """
        constructor = self._registry.get(name)
        if constructor is None:
            raise ToolNotFoundError(name)
        return constructor(actor)

    def create_tools(self, actor: Actor, names: Iterable[str] | None = None) -> list[ActorTool]:
        """Create several tools; all registered tools when ``names`` is None."""
        if names is None:
            names = self._registry
        return [self.create(name, actor) for name in names]


def tools_for_intents(tools: Iterable[ActorTool], intents: Iterable[Intent]) -> list[ActorTool]:
    """Select the tools whose intent appears among the given intents."""
    names = {i.name for i in intents}
    return [t for t in tools if t.intent in names]


def _resolution_fact(result: ItemResolutionResult) -> str:
    status = result.status
    if status == ItemResolutionStatus.NOT_FOUND:
        return (
            "FACT: The shop does not carry an item matching "
            "the customer's description."
        )
    if status == ItemResolutionStatus.AMBIGUOUS:
        options = ", ".join(i.name for i in result.candidates)
        return f"FACT: The customer could be referring to any of these items: {options}."
    item = result.item
    return f"FACT: The customer mentioned {item.name}, {item.description}, {item.cost}"


def facts_for_turn(
    result: IntentEngineResult,
    actor: Actor,
    tools: Iterable[ActorTool],
    resolver: ItemResolver | None = None,
) -> list[str]:
    """Turn a classified turn into narration facts.

    Args:
        result: Output of ``IntentEngine.process``.
        actor: The actor being addressed.
        tools: Tools the actor owns.
        resolver: Item resolver for ``item_name`` slots.

    Returns:
        "FACT: ..." lines, item resolutions first, then tool output.
    """
    resolver = resolver or ItemResolver()
    facts: list[str] = []

    resolutions = tuple(
        resolver.resolve(intent.slots[ITEM_SLOT], actor.inventory)
        for intent in result.intents
        if intent.has_slot(ITEM_SLOT)
    )
    for resolution in resolutions:
        facts.append(_resolution_fact(resolution))

    context = ToolInvocationContext(resolved_items=resolutions)
    for tool in tools_for_intents(tools, result.intents):
        output = tool.invoke(context)
        logger.debug(f"Tool {tool.name} -> {output!r}")
        if output and output.strip():
            facts.append(f"FACT: {output}")

    return facts
