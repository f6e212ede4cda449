"""
Error types for the Daemon MCP Server.

This module defines the ToolError base class and subclasses for domain-specific
errors. Code below the protocol layer raises ToolError (or a subclass) instead
of building JSON-RPC error objects directly; the protocol layer maps the
error_code to a JSON-RPC error code.
"""

from __future__ import annotations

from typing import Any


class ToolError(Exception):
    """
    Base exception class for daemon tool errors.

    ToolError instances are caught by the request handler and mapped to
    JSON-RPC errors using the table in ``daemon_mcp.protocol``.

    Attributes:
        error_code: Internal error code string (e.g., "invalid_argument",
            "not_found", "unavailable", "internal").
        message: Human-readable error message.
        details: Optional structured details (e.g., tool name, upstream URL).

    Example:
        >>> raise ToolError(
        ...     error_code="invalid_argument",
        ...     message="Missing tool name",
        ...     details={"params": {}},
        ... )
    """

    def __init__(
        self,
        error_code: str,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize a ToolError.

        Args:
            error_code: Internal error code string identifying the error category.
            message: Human-readable error message.
            details: Optional dictionary with structured error details.
        """
        super().__init__(message)
        self.error_code = error_code
        self.message = message
        self.details = details or {}

    def __repr__(self) -> str:
        """Return a detailed string representation."""
        return (
            f"{self.__class__.__name__}("
            f"error_code={self.error_code!r}, "
            f"message={self.message!r}, "
            f"details={self.details!r})"
        )

    def to_dict(self) -> dict[str, Any]:
        """
        Convert the error to a dictionary for logging.

        Returns:
            Dictionary with error_code, message, and details.
        """
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class InvalidArgumentError(ToolError):
    """
    Error raised when a request carries invalid or missing parameters.

    Maps to the "invalid_argument" error code (JSON-RPC -32602).
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize an InvalidArgumentError."""
        super().__init__(
            error_code="invalid_argument", message=message, details=details
        )


class NotFoundError(ToolError):
    """
    Error raised when a requested tool is not registered.

    Maps to the "not_found" error code (JSON-RPC -32601). Missing sections
    inside a known tool are not errors and never raise this.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize a NotFoundError."""
        super().__init__(error_code="not_found", message=message, details=details)


class UnavailableError(ToolError):
    """
    Error raised when the upstream daemon document cannot be retrieved.

    Maps to the "unavailable" error code (JSON-RPC -32603).
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize an UnavailableError."""
        super().__init__(error_code="unavailable", message=message, details=details)


class InternalError(ToolError):
    """
    Error raised for unexpected internal errors.

    Maps to the "internal" error code and should be used for unexpected
    exceptions that are logged with full stack traces.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize an InternalError."""
        super().__init__(error_code="internal", message=message, details=details)
