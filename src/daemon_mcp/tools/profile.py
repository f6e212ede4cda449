"""
Profile tools for the Daemon MCP Server.

Each tool reads from the daemon document parsed for the current request.
Missing data is never an error here: text tools fall back to a placeholder
message and list tools fall back to an empty list.
"""

from __future__ import annotations

from typing import Any

from daemon_mcp.context import ToolContext
from daemon_mcp.routing import tool_handler

# Tool name -> (section key, placeholder when the section is absent)
TEXT_TOOLS: dict[str, tuple[str, str]] = {
    "get_about": ("about", "About section not available"),
    "get_current_location": ("current_location", "Location not available"),
    "get_mission": ("mission", "Mission not available"),
}

# Tool name -> section key; absent sections resolve to []
LIST_TOOLS: dict[str, str] = {
    "get_preferences": "preferences",
    "get_telos": "telos",
    "get_favorite_books": "favorite_books",
    "get_favorite_movies": "favorite_movies",
    "get_favorite_podcasts": "favorite_podcasts",
    "get_daily_routine": "daily_routine",
    "get_predictions": "predictions",
}


def _text_section(ctx: ToolContext, key: str, placeholder: str) -> Any:
    return ctx.document.get(key) or placeholder


def _list_section(ctx: ToolContext, key: str) -> Any:
    return ctx.document.get(key) or []


# =============================================================================
# Text sections
# =============================================================================


@tool_handler("get_about")
async def handle_get_about(ctx: ToolContext, params: dict[str, Any]) -> Any:
    """Return the about section."""
    return _text_section(ctx, *TEXT_TOOLS["get_about"])


@tool_handler("get_current_location")
async def handle_get_current_location(ctx: ToolContext, params: dict[str, Any]) -> Any:
    """Return the current location section."""
    return _text_section(ctx, *TEXT_TOOLS["get_current_location"])


@tool_handler("get_mission")
async def handle_get_mission(ctx: ToolContext, params: dict[str, Any]) -> Any:
    """Return the mission section."""
    return _text_section(ctx, *TEXT_TOOLS["get_mission"])


# =============================================================================
# List sections
# =============================================================================


@tool_handler("get_preferences")
async def handle_get_preferences(ctx: ToolContext, params: dict[str, Any]) -> Any:
    return _list_section(ctx, LIST_TOOLS["get_preferences"])


@tool_handler("get_telos")
async def handle_get_telos(ctx: ToolContext, params: dict[str, Any]) -> Any:
    return _list_section(ctx, LIST_TOOLS["get_telos"])


@tool_handler("get_favorite_books")
async def handle_get_favorite_books(ctx: ToolContext, params: dict[str, Any]) -> Any:
    return _list_section(ctx, LIST_TOOLS["get_favorite_books"])


@tool_handler("get_favorite_movies")
async def handle_get_favorite_movies(ctx: ToolContext, params: dict[str, Any]) -> Any:
    return _list_section(ctx, LIST_TOOLS["get_favorite_movies"])


@tool_handler("get_favorite_podcasts")
async def handle_get_favorite_podcasts(ctx: ToolContext, params: dict[str, Any]) -> Any:
    return _list_section(ctx, LIST_TOOLS["get_favorite_podcasts"])


@tool_handler("get_daily_routine")
async def handle_get_daily_routine(ctx: ToolContext, params: dict[str, Any]) -> Any:
    return _list_section(ctx, LIST_TOOLS["get_daily_routine"])


@tool_handler("get_predictions")
async def handle_get_predictions(ctx: ToolContext, params: dict[str, Any]) -> Any:
    return _list_section(ctx, LIST_TOOLS["get_predictions"])


# =============================================================================
# Whole document and arbitrary sections
# =============================================================================


@tool_handler("get_all")
async def handle_get_all(ctx: ToolContext, params: dict[str, Any]) -> dict[str, Any]:
    """Return every section plus the last_updated timestamp."""
    return ctx.document.to_dict()


@tool_handler("get_section")
async def handle_get_section(ctx: ToolContext, params: dict[str, Any]) -> Any:
    """
    Return a section by its key.

    Params:
        section: Lower-case section key (e.g., "mission", "favorite_books").

    Returns:
        The section value, "Section name required" when no section is given,
        or "Section '<name>' not found" when the key is absent.
    """
    section = params.get("section")
    if not section:
        return "Section name required"

    value = ctx.document.get(str(section))
    if not value:
        return f"Section '{section}' not found"
    return value
