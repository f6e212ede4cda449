"""
Daemon MCP Server - personal profile knowledge base over JSON-RPC.

This package fetches a section-tagged daemon document, parses it into named
sections, and answers MCP-style tool calls (tools/list, tools/call) over HTTP.
"""

__version__ = "0.1.0"
