"""Cargo subprocess execution."""

import asyncio
import logging
import time
from pathlib import Path

from cargo_mcp.models import CommandResult
from cargo_mcp.services.locator import find_cargo_executable

logger = logging.getLogger(__name__)

READ_CHUNK_SIZE = 65536


class CargoLaunchError(RuntimeError):
    """Raised when the cargo process cannot be started at all."""

    def __init__(self, executable: str, cwd: str, cause: OSError | ValueError) -> None:
        self.executable = executable
        self.cwd = cwd
        self.cause = cause
        super().__init__(f"Failed to launch {executable} in {cwd}: {cause}")


async def _drain(stream: asyncio.StreamReader | None) -> str:
    """Read a pipe to EOF, keeping chunks in arrival order."""
    if stream is None:
        return ""

    chunks: list[bytes] = []
    while True:
        chunk = await stream.read(READ_CHUNK_SIZE)
        if not chunk:
            break
        chunks.append(chunk)
    return b"".join(chunks).decode("utf-8", errors="replace")


def _normalize_exit_code(returncode: int | None, command: str) -> int:
    """Map a missing or signal-based return code to 0."""
    if returncode is None:
        logger.warning("cargo %s finished without an exit code, reporting 0", command)
        return 0
    if returncode < 0:
        logger.warning(
            "cargo %s was terminated by signal %d, reporting exit code 0",
            command,
            -returncode,
        )
        return 0
    return returncode


async def run_cargo_command(
    command: str,
    args: list[str] | None = None,
    cwd: str | Path = ".",
) -> CommandResult:
    """Run ``cargo <command> <args...>`` in a project directory.

    stdout and stderr are captured independently and returned in full.
    There is no timeout and no size limit; the call waits until cargo exits.
    A nonzero exit code is returned as data, not raised.

    Args:
        command: Cargo subcommand (e.g. "build", "test")
        args: Extra arguments, passed through in order
        cwd: Working directory for cargo

    Returns:
        CommandResult with captured output and exit code

    Raises:
        CargoLaunchError: If the cargo process could not be started.
    """
    executable = find_cargo_executable()
    full_args = [command, *(args or [])]
    workdir = str(cwd)

    logger.info("Running %s %s (cwd=%s)", executable, " ".join(full_args), workdir)
    start = time.perf_counter()

    try:
        process = await asyncio.create_subprocess_exec(
            executable,
            *full_args,
            cwd=workdir,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except (OSError, ValueError) as e:
        # ValueError: NUL byte in an argument or cwd
        logger.error("Could not start %s: %s", executable, e)
        raise CargoLaunchError(executable, workdir, e) from e

    try:
        stdout, stderr = await asyncio.gather(
            _drain(process.stdout),
            _drain(process.stderr),
        )
        returncode = await process.wait()
    finally:
        if process.returncode is None:
            logger.warning("Killing cargo %s (pid %d) before completion", command, process.pid)
            process.kill()
            await process.wait()

    exit_code = _normalize_exit_code(returncode, command)
    duration_ms = (time.perf_counter() - start) * 1000
    logger.info(
        "cargo %s completed with exit code %d [%.1fms]",
        command,
        exit_code,
        duration_ms,
    )

    return CommandResult(stdout=stdout, stderr=stderr, exit_code=exit_code)
