"""
Tool handlers for the Daemon MCP Server.

Importing this package registers every profile tool with the default
registry.

Modules:
- profile: get_* tools over the parsed daemon document
"""

from daemon_mcp.tools.profile import (
    handle_get_about,
    handle_get_all,
    handle_get_current_location,
    handle_get_daily_routine,
    handle_get_favorite_books,
    handle_get_favorite_movies,
    handle_get_favorite_podcasts,
    handle_get_mission,
    handle_get_predictions,
    handle_get_preferences,
    handle_get_section,
    handle_get_telos,
)

__all__ = [
    "handle_get_about",
    "handle_get_current_location",
    "handle_get_mission",
    "handle_get_preferences",
    "handle_get_telos",
    "handle_get_favorite_books",
    "handle_get_favorite_movies",
    "handle_get_favorite_podcasts",
    "handle_get_daily_routine",
    "handle_get_predictions",
    "handle_get_all",
    "handle_get_section",
]
