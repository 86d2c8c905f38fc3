"""Data models for Cargo MCP."""

from cargo_mcp.models.command import CommandResult

__all__ = ["CommandResult"]
