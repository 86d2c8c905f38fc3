"""Cargo tools exposed over MCP.

Each tool maps its parameters to cargo flags, runs cargo in the
requested project directory and returns the formatted output.
"""

import logging
import os

from cargo_mcp.services import (
    CargoLaunchError,
    format_command_result,
    run_cargo_command,
)

logger = logging.getLogger(__name__)


def common_args(release: bool = False, verbose: bool = False) -> list[str]:
    """Build the flags shared by the compile-style subcommands."""
    args: list[str] = []
    if release:
        args.append("--release")
    if verbose:
        args.append("--verbose")
    return args


async def _execute(command: str, args: list[str], cwd: str | None) -> str:
    """Run cargo and format the result, reporting launch failures as text."""
    workdir = cwd or os.getcwd()
    try:
        result = await run_cargo_command(command, args, workdir)
    except CargoLaunchError as e:
        return f"Error: {e}"
    return format_command_result(result)


async def build(
    cwd: str | None = None,
    release: bool = False,
    verbose: bool = False,
    target: str | None = None,
    features: list[str] | None = None,
) -> str:
    """Compile the Rust project with `cargo build`.

    Args:
        cwd: Path to the Rust project (defaults to the server's directory).
        release: Build with optimizations.
        verbose: Use verbose output.
        target: Target triple to build for.
        features: Cargo features to enable.
    """
    args = common_args(release, verbose)
    if target:
        args += ["--target", target]
    if features:
        args += ["--features", ",".join(features)]
    return await _execute("build", args, cwd)


async def run(
    cwd: str | None = None,
    release: bool = False,
    verbose: bool = False,
    args: list[str] | None = None,
) -> str:
    """Build and run the binary with `cargo run`.

    Args:
        cwd: Path to the Rust project (defaults to the server's directory).
        release: Run the optimized build.
        verbose: Use verbose output.
        args: Arguments passed to the program after `--`.
    """
    command_args = common_args(release, verbose)
    if args:
        command_args += ["--", *args]
    return await _execute("run", command_args, cwd)


async def test(
    cwd: str | None = None,
    release: bool = False,
    verbose: bool = False,
    test_name: str | None = None,
    no_capture: bool = False,
) -> str:
    """Run the test suite with `cargo test`.

    Args:
        cwd: Path to the Rust project (defaults to the server's directory).
        release: Test the optimized build.
        verbose: Use verbose output.
        test_name: Only run tests whose name contains this string.
        no_capture: Show test stdout instead of capturing it.
    """
    args = common_args(release, verbose)
    if test_name:
        args.append(test_name)
    if no_capture:
        # --nocapture belongs to the test harness, not cargo
        args += ["--", "--nocapture"]
    return await _execute("test", args, cwd)


async def check(
    cwd: str | None = None,
    release: bool = False,
    verbose: bool = False,
) -> str:
    """Type-check the project without producing binaries (`cargo check`).

    Args:
        cwd: Path to the Rust project (defaults to the server's directory).
        release: Check with the release profile.
        verbose: Use verbose output.
    """
    return await _execute("check", common_args(release, verbose), cwd)


async def fmt(
    cwd: str | None = None,
    check: bool = False,
) -> str:
    """Format the code with `cargo fmt`.

    Args:
        cwd: Path to the Rust project (defaults to the server's directory).
        check: Only report formatting differences, do not rewrite files.
    """
    args = ["--check"] if check else []
    return await _execute("fmt", args, cwd)


async def clippy(
    cwd: str | None = None,
    release: bool = False,
    verbose: bool = False,
    fix: bool = False,
) -> str:
    """Lint the project with `cargo clippy`.

    Args:
        cwd: Path to the Rust project (defaults to the server's directory).
        release: Lint with the release profile.
        verbose: Use verbose output.
        fix: Automatically apply lint suggestions.
    """
    args = common_args(release, verbose)
    if fix:
        args.append("--fix")
    return await _execute("clippy", args, cwd)


async def add(
    dependencies: list[str],
    cwd: str | None = None,
    dev: bool = False,
) -> str:
    """Add dependencies to Cargo.toml with `cargo add`.

    Args:
        dependencies: Crates to add (e.g. ["serde", "tokio@1"]).
        cwd: Path to the Rust project (defaults to the server's directory).
        dev: Add as development dependencies.
    """
    args = list(dependencies)
    if dev:
        args.insert(0, "--dev")
    return await _execute("add", args, cwd)
