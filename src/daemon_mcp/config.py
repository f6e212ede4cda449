"""
Configuration management for the Daemon MCP Server.

This module implements the AppConfig Pydantic model and configuration loading.

Configuration is loaded from multiple sources with layered precedence:
1. Built-in defaults (Pydantic model defaults)
2. YAML config file (/etc/daemon-mcp/config.yml or --config path)
3. Environment variables (DAEMON_MCP_* prefix, __ for nesting)
4. Command-line arguments (highest precedence)
"""

from __future__ import annotations

import argparse
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

DEFAULT_CONFIG_PATH = Path("/etc/daemon-mcp/config.yml")
DEFAULT_DOCUMENT_URL = "https://daemon.timkleinschmidt.com/daemon.md"
DEFAULT_ENV_PREFIX = "DAEMON_MCP_"

_VALID_LOG_LEVELS = {"debug", "info", "warn", "warning", "error", "critical"}


def _normalize_log_level(v: str) -> str:
    v_lower = v.lower()
    if v_lower not in _VALID_LOG_LEVELS:
        raise ValueError(
            f"Invalid log level: {v}. Must be one of: {', '.join(sorted(_VALID_LOG_LEVELS))}"
        )
    # Normalize 'warn' to 'warning'
    if v_lower == "warn":
        return "warning"
    return v_lower


# =============================================================================
# Server Configuration
# =============================================================================


class ServerConfig(BaseModel):
    """HTTP server settings.

    Attributes:
        listen: Listen address and port (e.g., "127.0.0.1:8000").
        log_level: Log level passed to the HTTP server runtime.
    """

    listen: str = Field(
        default="127.0.0.1:8000",
        description="Listen address and port (e.g., '127.0.0.1:8000' or '0.0.0.0:8000')",
    )
    log_level: str = Field(
        default="info",
        description="Log level: debug, info, warn, error",
    )

    @field_validator("listen")
    @classmethod
    def validate_listen(cls, v: str) -> str:
        """Validate the host:port listen address."""
        host, sep, port = v.rpartition(":")
        if not sep or not host or not port.isdigit() or not 0 < int(port) < 65536:
            raise ValueError(f"Invalid listen address: {v}. Expected 'host:port'")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize log level."""
        return _normalize_log_level(v)

    @property
    def host(self) -> str:
        """Host part of the listen address."""
        return self.listen.rpartition(":")[0]

    @property
    def port(self) -> int:
        """Port part of the listen address."""
        return int(self.listen.rpartition(":")[2])


# =============================================================================
# Upstream Document Configuration
# =============================================================================


class UpstreamConfig(BaseModel):
    """Upstream daemon document settings.

    Attributes:
        document_url: URL of the section-tagged daemon document.
    """

    document_url: str = Field(
        default=DEFAULT_DOCUMENT_URL,
        description="URL of the daemon document fetched on every request",
    )

    @field_validator("document_url")
    @classmethod
    def validate_document_url(cls, v: str) -> str:
        """Require an http(s) URL."""
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Invalid document URL: {v}. Must be http(s)")
        return v


# =============================================================================
# Logging Configuration
# =============================================================================


class LoggingConfig(BaseModel):
    """Application logging configuration.

    Attributes:
        level: Log level.
        log_to_stdout: Whether to log to stdout.
        json_format: Emit JSON log lines instead of plain text.
        debug_mode: Force DEBUG level regardless of `level`.
    """

    level: str = Field(
        default="info",
        description="Log level",
    )
    log_to_stdout: bool = Field(
        default=True,
        description="Whether to log to stdout",
    )
    json_format: bool = Field(
        default=True,
        description="Emit JSON formatted log lines",
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable extra diagnostic logging",
    )

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate and normalize log level."""
        return _normalize_log_level(v)


# =============================================================================
# Main Application Configuration
# =============================================================================


class AppConfig(BaseModel):
    """
    Main application configuration model.

    Attributes:
        server: HTTP server settings.
        upstream: Upstream document settings.
        logging: Logging configuration.
    """

    server: ServerConfig = Field(
        default_factory=ServerConfig,
        description="Server settings",
    )
    upstream: UpstreamConfig = Field(
        default_factory=UpstreamConfig,
        description="Upstream daemon document settings",
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging configuration",
    )


# =============================================================================
# Configuration Loading Functions
# =============================================================================


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """
    Deep merge two dictionaries.

    Args:
        base: The base dictionary.
        override: The dictionary with values to override.

    Returns:
        A new dictionary with merged values.
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _load_yaml_config(config_path: Path) -> dict[str, Any]:
    """
    Load configuration from a YAML file.

    Raises:
        FileNotFoundError: If the config file doesn't exist.
        yaml.YAMLError: If the YAML is invalid.
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _parse_env_value(value: str) -> Any:
    """
    Parse an environment variable value to a Python type.

    Only booleans are converted; every other value is kept as a string
    and left to Pydantic validation.
    """
    if value.lower() in ("true", "yes", "on"):
        return True
    if value.lower() in ("false", "no", "off"):
        return False
    return value


def _load_env_config(prefix: str = DEFAULT_ENV_PREFIX) -> dict[str, Any]:
    """
    Load configuration from environment variables.

    Nested keys use a double underscore separator, e.g.
    DAEMON_MCP_UPSTREAM__DOCUMENT_URL=https://example.com/daemon.md
    """
    result: dict[str, Any] = {}

    for key, value in os.environ.items():
        if not key.startswith(prefix):
            continue

        parts = key[len(prefix) :].lower().split("__")

        current = result
        for part in parts[:-1]:
            current = current.setdefault(part, {})

        current[parts[-1]] = _parse_env_value(value)

    return result


def _parse_cli_args(args: list[str] | None = None) -> dict[str, Any]:
    """
    Parse command-line arguments into a config override dictionary.

    Args:
        args: Command-line arguments. If None, uses sys.argv.
    """
    parser = argparse.ArgumentParser(
        description="Daemon MCP Server",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        help="Path to configuration file",
    )
    parser.add_argument(
        "--listen",
        type=str,
        help="Listen address and port (host:port)",
    )
    parser.add_argument(
        "--document-url",
        type=str,
        help="URL of the daemon document",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["debug", "info", "warning", "error"],
        help="Override log level",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode",
    )

    parsed = parser.parse_args(args)

    result: dict[str, Any] = {}

    if parsed.config:
        result["_config_path"] = parsed.config

    if parsed.listen:
        result.setdefault("server", {})["listen"] = parsed.listen

    if parsed.document_url:
        result["upstream"] = {"document_url": parsed.document_url}

    if parsed.log_level:
        result.setdefault("server", {})["log_level"] = parsed.log_level
        result["logging"] = {"level": parsed.log_level}

    if parsed.debug:
        result.setdefault("logging", {})["debug_mode"] = True
        result.setdefault("server", {})["log_level"] = "debug"

    return result


def load_config(
    config_path: Path | str | None = None,
    env_prefix: str = DEFAULT_ENV_PREFIX,
    cli_args: list[str] | None = None,
) -> AppConfig:
    """
    Load configuration from all sources with layered precedence.

    Later sources override earlier ones: defaults, YAML file, environment
    variables, command-line arguments.

    Args:
        config_path: Path to YAML configuration file. If None, uses the
            --config argument or the default path when it exists.
        env_prefix: Prefix for environment variables.
        cli_args: Command-line arguments. If None, uses sys.argv.

    Returns:
        Fully configured AppConfig instance.

    Raises:
        FileNotFoundError: If a specified config file doesn't exist.
        ValidationError: If configuration is invalid.

    Example:
        >>> config = load_config(cli_args=[])
        >>> print(config.server.listen)
        127.0.0.1:8000
    """
    config_dict: dict[str, Any] = {}

    # Parse CLI args first to get config path
    cli_config = _parse_cli_args(cli_args)
    cli_config_path = cli_config.pop("_config_path", None)

    if config_path is None:
        if cli_config_path is not None:
            config_path = Path(cli_config_path)
        elif DEFAULT_CONFIG_PATH.exists():
            config_path = DEFAULT_CONFIG_PATH
    elif isinstance(config_path, str):
        config_path = Path(config_path)

    if config_path is not None:
        config_dict = _deep_merge(config_dict, _load_yaml_config(config_path))

    config_dict = _deep_merge(config_dict, _load_env_config(env_prefix))
    config_dict = _deep_merge(config_dict, cli_config)

    return AppConfig(**config_dict)
