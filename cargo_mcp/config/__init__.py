"""Configuration module for Cargo MCP."""

from cargo_mcp.config.settings import Settings

__all__ = ["Settings"]
