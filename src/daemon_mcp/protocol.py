"""
JSON-RPC 2.0 protocol handling for the Daemon MCP Server.

This module implements JSON-RPC 2.0 request parsing and response formatting
for the MCP tool-calling convention (tools/list, tools/call).

Features:
- JSON-RPC 2.0 request parsing with validation
- JSON-RPC 2.0 response formatting (success and error)
- ToolError to JSON-RPC error code mapping

Error Code Mapping:
- -32700: Parse error (malformed JSON body)
- -32600: Invalid Request (bad jsonrpc version tag, missing method)
- -32601: Method not found (unknown method or unknown tool)
- -32602: Invalid params (missing tool name, non-object params)
- -32603: Internal error (upstream document fetch failure, framework failure)
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from daemon_mcp.errors import ToolError

# =============================================================================
# JSON-RPC Error Codes
# =============================================================================

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603

JSONRPC_VERSION = "2.0"

# Id used on responses to bodies that could not be parsed at all
PARSE_ERROR_ID = 1

ERROR_CODE_MAP: dict[str, int] = {
    "invalid_argument": INVALID_PARAMS,
    "not_found": METHOD_NOT_FOUND,
    "unavailable": INTERNAL_ERROR,
    "internal": INTERNAL_ERROR,
}

# MCP methods served by this server
METHOD_TOOLS_LIST = "tools/list"
METHOD_TOOLS_CALL = "tools/call"


# =============================================================================
# Data Classes
# =============================================================================


class JSONRPCError(Exception):
    """
    Represents a JSON-RPC 2.0 error object.

    This class is both an Exception (so it can be raised) and a data container
    for JSON-RPC error information.

    Attributes:
        code: Integer JSON-RPC 2.0 error code.
        message: Human-readable error message.
    """

    def __init__(self, code: int, message: str) -> None:
        """
        Initialize a JSONRPCError.

        Args:
            code: Integer error code.
            message: Human-readable error message.
        """
        super().__init__(message)
        self.code = code
        self.message = message

    def to_dict(self) -> dict[str, Any]:
        """Convert the error to a dictionary for JSON serialization."""
        return {"code": self.code, "message": self.message}

    def __repr__(self) -> str:
        """Return a detailed string representation."""
        return f"JSONRPCError(code={self.code}, message={self.message!r})"


@dataclass
class JSONRPCRequest:
    """
    Represents a parsed JSON-RPC 2.0 request.

    Attributes:
        jsonrpc: Protocol version (always "2.0" once validated).
        id: Request identifier (string or number), echoed in the response.
        method: The MCP method to invoke ("tools/list" or "tools/call").
        params: Parameters for the method (empty dict when absent).
    """

    jsonrpc: str
    id: str | int | None
    method: str
    params: dict[str, Any] = field(default_factory=dict)

    @property
    def tool_name(self) -> str | None:
        """Return params.name for tools/call requests, if present."""
        name = self.params.get("name")
        return name if name else None

    @property
    def tool_arguments(self) -> dict[str, Any]:
        """Return params.arguments, or an empty dict when absent or not an object."""
        arguments = self.params.get("arguments")
        return arguments if isinstance(arguments, dict) else {}


@dataclass
class JSONRPCResponse:
    """
    Represents a JSON-RPC 2.0 response.

    Exactly one of result or error is serialized.

    Attributes:
        jsonrpc: Protocol version (always "2.0").
        id: Request identifier (matches the request).
        result: Success result (if not an error).
        error: Error object (if an error occurred).
    """

    jsonrpc: str
    id: str | int | None
    result: Any | None = None
    error: JSONRPCError | None = None

    def to_dict(self) -> dict[str, Any]:
        """
        Convert the response to a dictionary for JSON serialization.

        Returns:
            Dictionary with jsonrpc, id, and either result or error.
        """
        response: dict[str, Any] = {"jsonrpc": self.jsonrpc}
        if self.error is not None:
            response["error"] = self.error.to_dict()
        else:
            response["result"] = self.result
        response["id"] = self.id
        return response

    def to_json(self) -> str:
        """Serialize the response to a JSON string."""
        return json.dumps(self.to_dict(), ensure_ascii=False)


# =============================================================================
# Request Parsing
# =============================================================================


def load_payload(request_body: str | bytes) -> Any:
    """
    Decode a raw request body into a JSON value.

    Args:
        request_body: Raw body as received from the transport.

    Returns:
        The decoded JSON value (not yet validated as a request).

    Raises:
        JSONRPCError: With PARSE_ERROR if the body is not valid UTF-8 JSON.
    """
    try:
        return json.loads(request_body)
    except ValueError as e:
        # JSONDecodeError and UnicodeDecodeError are both ValueErrors
        raise JSONRPCError(code=PARSE_ERROR, message="Parse error") from e


def validate_request(data: Any) -> JSONRPCRequest:
    """
    Validate a decoded JSON value as a JSON-RPC 2.0 request.

    Args:
        data: Value returned by load_payload().

    Returns:
        Parsed JSONRPCRequest object.

    Raises:
        JSONRPCError: If the request is not a valid JSON-RPC 2.0 request.
    """
    if not isinstance(data, dict):
        raise JSONRPCError(
            code=INVALID_REQUEST,
            message="Invalid Request: Request must be a JSON object",
        )

    jsonrpc = data.get("jsonrpc")
    if jsonrpc != JSONRPC_VERSION:
        raise JSONRPCError(code=INVALID_REQUEST, message="Invalid Request")

    method = data.get("method")
    if not isinstance(method, str) or not method:
        raise JSONRPCError(
            code=INVALID_REQUEST,
            message="Invalid Request: 'method' must be a non-empty string",
        )

    params = data.get("params")
    if params is None:
        params = {}
    if not isinstance(params, dict):
        raise JSONRPCError(
            code=INVALID_PARAMS,
            message="Invalid params: 'params' must be an object",
        )

    return JSONRPCRequest(
        jsonrpc=JSONRPC_VERSION,
        id=extract_request_id(data),
        method=method,
        params=params,
    )


def extract_request_id(data: Any) -> str | int | None:
    """Return the request id from a decoded body, or None if unusable."""
    if not isinstance(data, dict):
        return None
    request_id = data.get("id")
    if isinstance(request_id, bool) or not isinstance(request_id, (str, int, float)):
        return None
    return request_id


# =============================================================================
# Response Formatting
# =============================================================================


def format_success_response(
    request_id: str | int | None,
    result: Any,
) -> JSONRPCResponse:
    """
    Format a successful JSON-RPC 2.0 response.

    Example:
        >>> response = format_success_response(1, {"tools": []})
        >>> print(response.to_json())
        {"jsonrpc": "2.0", "result": {"tools": []}, "id": 1}
    """
    return JSONRPCResponse(
        jsonrpc=JSONRPC_VERSION,
        id=request_id,
        result=result,
        error=None,
    )


def format_error_response(
    request_id: str | int | None,
    error: JSONRPCError,
) -> JSONRPCResponse:
    """
    Format a JSON-RPC 2.0 error response.

    Args:
        request_id: The request ID (PARSE_ERROR_ID for unparseable bodies).
        error: The JSONRPCError object describing the error.

    Returns:
        JSONRPCResponse object representing an error response.
    """
    return JSONRPCResponse(
        jsonrpc=JSONRPC_VERSION,
        id=request_id,
        result=None,
        error=error,
    )


def format_text_content(text: str) -> dict[str, Any]:
    """
    Wrap text as a tools/call result with a single text content item.

    Args:
        text: Text payload of the tool result.

    Returns:
        Result object of the form {"content": [{"type": "text", "text": ...}]}.
    """
    return {"content": [{"type": "text", "text": text}]}


# =============================================================================
# ToolError to JSON-RPC Error Mapping
# =============================================================================


def tool_error_to_jsonrpc_error(tool_error: ToolError) -> JSONRPCError:
    """
    Convert a ToolError to a JSONRPCError.

    Unmapped error codes become INTERNAL_ERROR.

    Example:
        >>> from daemon_mcp.errors import InvalidArgumentError
        >>> err = tool_error_to_jsonrpc_error(InvalidArgumentError("Missing tool name"))
        >>> print(err.code)
        -32602
    """
    jsonrpc_code = ERROR_CODE_MAP.get(tool_error.error_code, INTERNAL_ERROR)
    return JSONRPCError(code=jsonrpc_code, message=tool_error.message)


def create_method_not_found_error(method: str) -> JSONRPCError:
    """Create a "Method not found" error for an unsupported JSON-RPC method."""
    return JSONRPCError(code=METHOD_NOT_FOUND, message=f"Method not found: {method}")


def create_internal_error(message: str) -> JSONRPCError:
    """Create an internal error for unexpected exceptions."""
    return JSONRPCError(code=INTERNAL_ERROR, message=message)
