"""Services for Cargo MCP."""

from cargo_mcp.services.executors import CargoLaunchError, run_cargo_command
from cargo_mcp.services.formatter import format_command_result
from cargo_mcp.services.locator import find_cargo_executable
from cargo_mcp.services.state import get_settings, reset_state, set_settings

__all__ = [
    "CargoLaunchError",
    "find_cargo_executable",
    "format_command_result",
    "get_settings",
    "reset_state",
    "run_cargo_command",
    "set_settings",
]
