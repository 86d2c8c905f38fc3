"""Utilities for Cargo MCP."""

from cargo_mcp.utils.console import ColorfulFormatter, MCPRequestFormatter

__all__ = ["ColorfulFormatter", "MCPRequestFormatter"]
