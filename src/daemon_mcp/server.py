"""
JSON-RPC request handling for the Daemon MCP Server.

process_request() runs the complete lifecycle of one request:
1. Parse and validate the JSON-RPC envelope
2. Fetch the upstream daemon document
3. Parse the document into sections
4. Route tools/list to the catalog and tools/call to the tool registry
5. Format the success or error response

Every JSON-RPC level failure is returned as an error envelope; nothing is
raised to the transport.
"""

from __future__ import annotations

import json
from typing import Any, Protocol

# Importing the tools package registers the profile tools
import daemon_mcp.tools  # noqa: F401
from daemon_mcp.catalog import list_tools
from daemon_mcp.errors import InvalidArgumentError, NotFoundError, ToolError
from daemon_mcp.logging import get_logger
from daemon_mcp.parser import ProfileDocument, parse_document
from daemon_mcp.protocol import (
    METHOD_TOOLS_CALL,
    METHOD_TOOLS_LIST,
    PARSE_ERROR_ID,
    JSONRPCError,
    JSONRPCRequest,
    JSONRPCResponse,
    create_internal_error,
    create_method_not_found_error,
    extract_request_id,
    format_error_response,
    format_success_response,
    format_text_content,
    load_payload,
    tool_error_to_jsonrpc_error,
    validate_request,
)
from daemon_mcp.routing import TOOL_NOT_FOUND, ToolRegistry, get_default_registry

logger = get_logger(__name__)


class DocumentSource(Protocol):
    """Anything that can produce the raw daemon document text."""

    async def fetch(self) -> str: ...


def render_tool_value(value: Any) -> str:
    """Render a tool value as the text of a content item."""
    if isinstance(value, str):
        return value
    return json.dumps(value, indent=2, ensure_ascii=False)


async def handle_tools_call(
    request: JSONRPCRequest,
    document: ProfileDocument,
    registry: ToolRegistry,
) -> dict[str, Any]:
    """
    Resolve a tools/call request into a text content result.

    Raises:
        InvalidArgumentError: If params.name is missing.
        NotFoundError: If no tool is registered under params.name.
    """
    tool_name = request.tool_name
    if tool_name is None:
        raise InvalidArgumentError(message="Missing tool name")

    value = await registry.dispatch(
        tool_name,
        document,
        request.tool_arguments,
        request_id=request.id,
    )
    if value is TOOL_NOT_FOUND:
        raise NotFoundError(
            message=f"Tool not found: {tool_name}",
            details={"tool": tool_name},
        )

    return format_text_content(render_tool_value(value))


async def process_request(
    request_body: str | bytes,
    source: DocumentSource,
    registry: ToolRegistry | None = None,
) -> JSONRPCResponse:
    """
    Process a single JSON-RPC request and return the response.

    Args:
        request_body: Raw request body.
        source: Provider of the upstream daemon document.
        registry: ToolRegistry to dispatch tools/call to. Uses the default
            registry when not provided.

    Returns:
        The JSON-RPC response (success or error).
    """
    if registry is None:
        registry = get_default_registry()

    try:
        payload = load_payload(request_body)
    except JSONRPCError as e:
        logger.info("Rejected unparseable request body")
        return format_error_response(PARSE_ERROR_ID, e)

    request_id = extract_request_id(payload)

    try:
        request = validate_request(payload)
        logger.info(
            "Handling request",
            extra={"method": request.method, "request_id": request_id},
        )

        document = parse_document(await source.fetch())

        if request.method == METHOD_TOOLS_LIST:
            result: Any = {"tools": list_tools()}
        elif request.method == METHOD_TOOLS_CALL:
            result = await handle_tools_call(request, document, registry)
        else:
            raise create_method_not_found_error(request.method)

        return format_success_response(request_id, result)

    except JSONRPCError as e:
        logger.info(
            "JSON-RPC error",
            extra={"request_id": request_id, "code": e.code, "error": e.message},
        )
        return format_error_response(request_id, e)

    except ToolError as e:
        jsonrpc_error = tool_error_to_jsonrpc_error(e)
        logger.info(
            "Tool error",
            extra={
                "request_id": request_id,
                "code": jsonrpc_error.code,
                "error": e.to_dict(),
            },
        )
        return format_error_response(request_id, jsonrpc_error)

    except Exception as e:
        logger.exception(
            "Unexpected error processing request",
            extra={"request_id": request_id, "error": str(e)},
        )
        return format_error_response(
            request_id,
            create_internal_error(f"Internal server error: {type(e).__name__}"),
        )
