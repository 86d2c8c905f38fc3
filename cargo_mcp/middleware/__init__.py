"""Cargo MCP middleware components."""

from cargo_mcp.middleware.base import CargoMiddleware
from cargo_mcp.middleware.errors import ErrorHandlingMiddleware
from cargo_mcp.middleware.logging import LoggingMiddleware

__all__ = [
    "CargoMiddleware",
    "ErrorHandlingMiddleware",
    "LoggingMiddleware",
]
