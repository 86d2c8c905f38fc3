"""Application settings from environment variables.

Centralized environment variable parsing and validation.
"""

import logging
import os
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


@dataclass
class Settings:
    """Application settings from environment.

    Handles parsing, validation, and defaults for all env vars.
    """

    # Transport
    transport: str = field(default="stdio")
    http_host: str = field(default="127.0.0.1")
    http_port: int = field(default=8000)

    # Logging
    log_level: str = field(default="INFO")
    log_colors: bool = field(default=True)
    log_payloads: bool = field(default=False)
    slow_threshold_ms: int = field(default=30_000)
    include_traceback: bool = field(default=False)

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from CARGO_MCP_* environment variables.

        Returns:
            Settings instance with values from environment
        """
        return cls(
            transport=cls._get_transport(),
            http_host=os.getenv("CARGO_MCP_HTTP_HOST", "127.0.0.1"),
            http_port=cls._get_int("CARGO_MCP_HTTP_PORT", 8000),
            log_level=os.getenv("CARGO_MCP_LOG_LEVEL", "INFO").upper(),
            log_colors=cls._get_bool("CARGO_MCP_LOG_COLORS", True),
            log_payloads=cls._get_bool("CARGO_MCP_LOG_PAYLOADS", False),
            slow_threshold_ms=cls._get_int("CARGO_MCP_SLOW_THRESHOLD_MS", 30_000),
            include_traceback=cls._get_bool("CARGO_MCP_INCLUDE_TRACEBACK", False),
        )

    @staticmethod
    def _get_int(key: str, default: int) -> int:
        """Get integer from environment.

        Args:
            key: Environment variable key
            default: Default value if not set or invalid

        Returns:
            Integer value from environment or default
        """
        value = os.getenv(key)
        if value is None:
            return default

        try:
            return int(value)
        except ValueError:
            logger.warning("Invalid int for %s: %s, using default %d", key, value, default)
            return default

    @staticmethod
    def _get_bool(key: str, default: bool) -> bool:
        """Get boolean from environment."""
        value = os.getenv(key)
        if value is None:
            return default
        return value.lower() in ("1", "true", "yes", "on")

    @staticmethod
    def _get_transport() -> str:
        """Get transport from environment with validation.

        Returns:
            Transport type ("stdio" or "http")
        """
        transport = os.getenv("CARGO_MCP_TRANSPORT", "").lower()
        if transport in ("http", "stdio"):
            return transport
        return "stdio"
