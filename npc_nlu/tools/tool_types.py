"""Actor tool type definitions.

Immutable dataclasses describing the tools an actor can run once an intent
is classified, plus the context handed to a tool invocation.
"""

from dataclasses import dataclass, field
from typing import Any, Protocol

from npc_nlu.inventory.resolver import ItemResolutionResult


@dataclass(frozen=True)
class ToolParameter:
    """Parameter definition for a tool.

    Attributes:
        name: Parameter name.
        type: JSON Schema type (string, integer, boolean, array, object).
        description: What this parameter does.
        required: Whether the parameter is required.
        enum: Allowed values (if constrained).
    """

    name: str
    type: str
    description: str
    required: bool = True
    enum: tuple[str, ...] | None = None


@dataclass(frozen=True)
class ToolDefinition:
    """Typed description of an actor tool.

    Attributes:
        name: Unique tool name.
        description: What the tool does.
        intent: Intent name that triggers the tool.
        parameters: Parameter definitions.
    """

    name: str
    description: str
    intent: str
    parameters: tuple[ToolParameter, ...] = field(default_factory=tuple)

    def to_json_schema(self) -> dict[str, Any]:
        """Convert the parameters to a JSON Schema object."""
        properties: dict[str, Any] = {}
        required: list[str] = []

        for param in self.parameters:
            prop: dict[str, Any] = {
                "type": param.type,
                "description": param.description,
            }
            if param.enum:
                prop["enum"] = list(param.enum)
            properties[param.name] = prop

            if param.required:
                required.append(param.name)

        return {
            "type": "object",
            "properties": properties,
            "required": required,
        }

    def to_function_format(self) -> dict[str, Any]:
        """Convert to the function-calling structure chat runtimes accept."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.to_json_schema(),
            },
        }


@dataclass(frozen=True)
class ToolInvocationContext:
    """Inputs available to a tool run.

    Attributes:
        resolved_items: Item resolution results for the turn's item slots.
    """

    resolved_items: tuple[ItemResolutionResult, ...] = ()


class ActorTool(Protocol):
    """A deterministic tool bound to one intent."""

    definition: ToolDefinition

    @property
    def name(self) -> str:
        ...

    @property
    def intent(self) -> str:
        ...

    def invoke(self, context: ToolInvocationContext) -> str:
        ...
