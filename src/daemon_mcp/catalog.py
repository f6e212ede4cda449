"""
Static tool catalog for the Daemon MCP Server.

The catalog is the fixed list of tools returned by tools/list. It is built
once at import time and never mutated.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any


def _no_arguments() -> dict[str, Any]:
    return {"type": "object", "properties": {}}


@dataclass(frozen=True)
class ToolDescriptor:
    """
    Describes a callable tool.

    Attributes:
        name: Unique tool name (e.g., "get_mission").
        description: Human-readable description.
        input_schema: JSON Schema object describing the tool arguments.
    """

    name: str
    description: str
    input_schema: dict[str, Any] = field(default_factory=_no_arguments)

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the MCP field names."""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": copy.deepcopy(self.input_schema),
        }


TOOLS: tuple[ToolDescriptor, ...] = (
    ToolDescriptor("get_about", "Get information about the daemon owner"),
    ToolDescriptor("get_current_location", "Get current location"),
    ToolDescriptor("get_mission", "Get mission statement"),
    ToolDescriptor("get_preferences", "Get preferences and work style"),
    ToolDescriptor("get_telos", "Get TELOS framework"),
    ToolDescriptor("get_favorite_books", "Get favorite books"),
    ToolDescriptor("get_favorite_movies", "Get favorite movies"),
    ToolDescriptor("get_favorite_podcasts", "Get favorite podcasts"),
    ToolDescriptor("get_daily_routine", "Get daily routine"),
    ToolDescriptor("get_predictions", "Get predictions about the future"),
    ToolDescriptor("get_all", "Get all daemon data"),
    ToolDescriptor(
        "get_section",
        "Get a specific section by name",
        {
            "type": "object",
            "properties": {
                "section": {
                    "type": "string",
                    "description": "Section name to retrieve",
                }
            },
            "required": ["section"],
        },
    ),
)


def list_tools() -> list[dict[str, Any]]:
    """
    Return the serialized tool catalog for a tools/list response.

    Schemas are copied on every call; the shared descriptors are never handed out.
    """
    return [tool.to_dict() for tool in TOOLS]
