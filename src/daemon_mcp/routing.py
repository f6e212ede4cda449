"""
Tool routing and registration for the Daemon MCP Server.

This module provides:
- ToolRegistry: maps tool names to handler functions
- @tool_handler: decorator for registering handlers
- TOOL_NOT_FOUND: sentinel returned when a tool name is unknown
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, Final

from daemon_mcp.context import ToolContext
from daemon_mcp.errors import InternalError, ToolError
from daemon_mcp.logging import get_logger
from daemon_mcp.parser import ProfileDocument

logger = get_logger(__name__)

# Tool handlers read only the parsed document and the arguments
ToolHandler = Callable[[ToolContext, dict[str, Any]], Awaitable[Any]]


class _ToolNotFound:
    """Marker type for an unknown tool name. Compare with `is`."""

    def __repr__(self) -> str:
        return "TOOL_NOT_FOUND"


TOOL_NOT_FOUND: Final = _ToolNotFound()

# Default global registry (singleton)
_default_registry: ToolRegistry | None = None


class ToolRegistry:
    """
    Registry for mapping tool names to handler functions.

    Example:
        >>> registry = ToolRegistry()
        >>> registry.register("get_mission", handle_get_mission)
        >>> value = await registry.dispatch("get_mission", document)
    """

    def __init__(self) -> None:
        """Initialize an empty tool registry."""
        self._handlers: dict[str, ToolHandler] = {}

    def register(self, name: str, handler: ToolHandler) -> None:
        """
        Register a tool handler with the given name.

        Raises:
            ValueError: If a handler is already registered for the name.
        """
        if name in self._handlers:
            raise ValueError(f"Tool '{name}' is already registered")
        self._handlers[name] = handler

    def get_handler(self, name: object) -> ToolHandler | None:
        """Get the handler for a tool by name, or None if not found."""
        if not isinstance(name, str):
            return None
        return self._handlers.get(name)

    async def dispatch(
        self,
        name: Any,
        document: ProfileDocument,
        arguments: Any = None,
        *,
        request_id: str | int | None = None,
    ) -> Any:
        """
        Resolve a tool call against a parsed document.

        Args:
            name: Tool name to call. Names that are not strings are unknown.
            document: The parsed daemon document.
            arguments: Tool arguments. Anything other than a dict is treated
                as no arguments.
            request_id: JSON-RPC request id, carried for logging.

        Returns:
            The tool's value, or TOOL_NOT_FOUND if no handler is registered.

        Raises:
            ToolError: If the handler raises ToolError.
            InternalError: If the handler raises any other exception.
        """
        handler = self.get_handler(name)
        if handler is None:
            return TOOL_NOT_FOUND

        ctx = ToolContext(tool_name=name, document=document, request_id=request_id)
        params = arguments if isinstance(arguments, dict) else {}
        logger.debug("Dispatching tool", extra=ctx.to_dict())

        try:
            return await handler(ctx, params)
        except ToolError:
            raise
        except Exception as e:
            raise InternalError(
                message=f"Internal error in tool '{name}': {e!s}",
                details={"tool": name, "exception_type": type(e).__name__},
            ) from e


def get_default_registry() -> ToolRegistry:
    """
    Get the default global tool registry.

    The profile tools register themselves here when daemon_mcp.tools is
    imported.
    """
    global _default_registry
    if _default_registry is None:
        _default_registry = ToolRegistry()
    return _default_registry


def tool_handler(
    name: str,
    *,
    registry: ToolRegistry | None = None,
) -> Callable[[ToolHandler], ToolHandler]:
    """
    Decorator for registering a function as a tool handler.

    Example:
        >>> @tool_handler("get_mission")
        ... async def handle_get_mission(ctx: ToolContext, params: dict) -> str:
        ...     return ctx.document.get("mission") or "Mission not available"
    """

    def decorator(handler: ToolHandler) -> ToolHandler:
        target_registry = registry if registry is not None else get_default_registry()
        target_registry.register(name, handler)
        return handler

    return decorator
