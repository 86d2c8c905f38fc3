"""Cargo MCP FastMCP server.

This is a thin wrapper that wires together the MCP server with tools.
All cargo handling is delegated to the tools/ and services/ modules.
"""

import logging
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import PlainTextResponse

from cargo_mcp.config import Settings
from cargo_mcp.middleware import ErrorHandlingMiddleware, LoggingMiddleware
from cargo_mcp.services import find_cargo_executable, get_settings
from cargo_mcp.tools import add, build, check, clippy, fmt, run, test
from cargo_mcp.utils.console import MCPRequestFormatter

INSTRUCTIONS = """
Cargo MCP runs cargo commands in a local Rust project and returns the
captured output.

Tools:
- build: compile the project (cargo build)
- run: build and run the binary (cargo run)
- test: run the test suite (cargo test)
- check: type-check without producing binaries (cargo check)
- fmt: format the code (cargo fmt)
- clippy: lint the code (cargo clippy)
- add: add dependencies to Cargo.toml (cargo add)

Every tool takes `cwd`, the path to the project. Output is returned as
STDOUT/STDERR blocks followed by an `Exit code: N` line; a nonzero exit
code means cargo reported a failure.
"""


def _configure_logging(settings: Settings) -> None:
    """Configure colorful stderr logging for the cargo_mcp package.

    stdout is reserved for the stdio transport, so everything goes to stderr.
    """
    use_colors = settings.log_colors and sys.stderr.isatty()

    cargo_logger = logging.getLogger("cargo_mcp")
    cargo_logger.setLevel(getattr(logging, settings.log_level, logging.INFO))

    if not cargo_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(MCPRequestFormatter(use_colors=use_colors))
        cargo_logger.addHandler(handler)
        cargo_logger.propagate = False

    for noisy_logger in [
        "uvicorn",
        "uvicorn.access",
        "uvicorn.error",
        "httpx",
        "httpcore",
        "fastmcp",
        "mcp",
        "starlette",
        "anyio",
    ]:
        logging.getLogger(noisy_logger).setLevel(logging.WARNING)


# Configure logging at module load time
_configure_logging(get_settings())

logger = logging.getLogger(__name__)


@asynccontextmanager
async def app_lifespan(server: FastMCP) -> AsyncIterator[dict[str, Any]]:
    """Log startup details and the cargo executable that will be used.

    Args:
        server: The FastMCP server instance

    Yields:
        Dict with the resolved cargo executable
    """
    logger.info("Cargo MCP server starting up")

    cargo = find_cargo_executable()
    logger.info("Using cargo executable: %s", cargo)
    logger.info("Cargo MCP server ready to accept connections")

    try:
        yield {"cargo": cargo}
    finally:
        logger.info("Cargo MCP server shutting down")


def configure_middleware(server: FastMCP, settings: Settings) -> None:
    """Configure middleware stack for the server.

    Adds middleware in order: ErrorHandling -> Logging (with integrated timing)

    Args:
        server: The FastMCP server to configure.
        settings: Settings with logging options.
    """
    # First added = innermost
    server.add_middleware(
        ErrorHandlingMiddleware(include_traceback=settings.include_traceback)
    )
    server.add_middleware(
        LoggingMiddleware(
            include_payloads=settings.log_payloads,
            slow_threshold_ms=float(settings.slow_threshold_ms),
        )
    )


def create_server() -> FastMCP:
    """Create and configure the MCP server with middleware and tools.

    Returns:
        Configured FastMCP server instance
    """
    settings = get_settings()

    server = FastMCP(
        "cargo_mcp",
        instructions=INSTRUCTIONS,
        lifespan=app_lifespan,
    )

    configure_middleware(server, settings)

    for tool in (build, run, test, check, fmt, clippy, add):
        server.tool(name=tool.__name__)(tool)

    @server.custom_route("/health", methods=["GET"])
    async def health_check(request: Request) -> PlainTextResponse:
        """Health check endpoint."""
        client_host = request.client.host if request.client else "unknown"
        logger.debug("Health check from %s", client_host)
        return PlainTextResponse("OK")

    return server


# Default server instance
mcp = create_server()
