"""Error logging middleware for cargo tool calls."""

import logging
from typing import Any

from fastmcp.server.middleware import MiddlewareContext

from cargo_mcp.middleware.base import CargoMiddleware


class ErrorHandlingMiddleware(CargoMiddleware):
    """Log exceptions raised while handling a request, then re-raise.

    Tool failures are logged with the tool name and the project directory
    it was called for, so a crash can be tied back to a cargo project.
    FastMCP turns the re-raised exception into an error response.
    """

    def __init__(
        self,
        logger: logging.Logger | None = None,
        include_traceback: bool = False,
    ) -> None:
        """Initialize error handling middleware.

        Args:
            logger: Optional custom logger.
            include_traceback: Whether to include full traceback in logs.
        """
        super().__init__(logger=logger)
        self.include_traceback = include_traceback

    def _describe(self, context: MiddlewareContext) -> str:
        """Name the request, including tool and cwd for tool calls."""
        if context.method != "tools/call":
            return str(context.method)

        tool_name = getattr(context.message, "name", "unknown")
        arguments = getattr(context.message, "arguments", None) or {}
        cwd = arguments.get("cwd") or "<server cwd>"
        return f"tool {tool_name} (cwd={cwd})"

    async def on_message(
        self,
        context: MiddlewareContext,
        call_next: Any,
    ) -> Any:
        """Log errors raised by the next handler and re-raise them."""
        try:
            return await call_next(context)
        except Exception as e:
            self.logger.error(
                "Error in %s: %s: %s",
                self._describe(context),
                type(e).__name__,
                e,
                exc_info=self.include_traceback,
            )
            raise
