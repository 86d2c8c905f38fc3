"""MCP tools for Cargo MCP."""

from cargo_mcp.tools.cargo import add, build, check, clippy, fmt, run, test

__all__ = ["add", "build", "check", "clippy", "fmt", "run", "test"]
