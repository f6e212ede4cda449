"""
Tool context for the Daemon MCP Server.

This module defines the ToolContext dataclass that carries everything a tool
handler needs for a single tools/call: the tool name, the request id, and the
freshly parsed daemon document.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from daemon_mcp.parser import ProfileDocument


@dataclass
class ToolContext:
    """
    Encapsulates the context of a single tool call.

    Attributes:
        tool_name: Name of the tool being called (e.g., "get_mission").
        document: The daemon document parsed for this request.
        request_id: Identifier from the JSON-RPC request, if any.
        timestamp: When the call was dispatched (UTC).
    """

    tool_name: str
    document: ProfileDocument
    request_id: str | int | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def to_dict(self) -> dict[str, Any]:
        """
        Convert the context to a dictionary for logging.

        The document body is summarized by its section names.
        """
        return {
            "tool_name": self.tool_name,
            "request_id": self.request_id,
            "timestamp": self.timestamp.isoformat(),
            "sections": sorted(self.document.sections),
        }
