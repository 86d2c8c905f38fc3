"""Locate the cargo executable."""

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

CARGO_PATH_ENV = "CARGO_PATH"
DEFAULT_CARGO = "cargo"


def _common_locations() -> list[Path]:
    """Conventional cargo install locations, checked in order."""
    home = Path.home()
    return [
        home / ".cargo" / "bin" / "cargo",
        home / ".rustup" / "toolchains" / "stable-x86_64-apple-darwin" / "bin" / "cargo",
        home / ".rustup" / "toolchains" / "stable-x86_64-unknown-linux-gnu" / "bin" / "cargo",
        home / ".rustup" / "toolchains" / "stable-x86_64-pc-windows-msvc" / "bin" / "cargo.exe",
        Path("/usr/local/bin/cargo"),
        Path("/usr/bin/cargo"),
        Path("C:\\Program Files\\Rust\\bin\\cargo.exe"),
        Path("C:\\Rust\\bin\\cargo.exe"),
    ]


def find_cargo_executable() -> str:
    """Find the cargo executable.

    Checks the CARGO_PATH override first, then well-known install
    locations, and finally falls back to the bare ``cargo`` name so the
    OS resolves it through PATH at launch time.

    Returns:
        Path to cargo, or "cargo" if no candidate exists on disk
    """
    override = os.getenv(CARGO_PATH_ENV)
    if override:
        if os.path.exists(override):
            logger.debug("Using cargo from %s: %s", CARGO_PATH_ENV, override)
            return override
        logger.debug("Ignoring %s=%s (path does not exist)", CARGO_PATH_ENV, override)

    for location in _common_locations():
        if location.exists():
            logger.debug("Found cargo at %s", location)
            return str(location)

    logger.debug("No cargo install found, falling back to PATH lookup")
    return DEFAULT_CARGO
