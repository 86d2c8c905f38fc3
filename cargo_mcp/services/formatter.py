"""Render command results as text for tool responses."""

from cargo_mcp.models import CommandResult


def format_command_result(result: CommandResult) -> str:
    """Format a command result into a single text block.

    Empty streams are omitted. The exit code line is always last.
    """
    output = ""

    if result.stdout:
        output += f"STDOUT:\n{result.stdout}\n"

    if result.stderr:
        output += f"STDERR:\n{result.stderr}\n"

    output += f"Exit code: {result.exit_code}"

    return output
