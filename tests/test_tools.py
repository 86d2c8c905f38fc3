"""Tests for cargo tool argument handling."""

import os
from collections.abc import Iterator
from unittest.mock import AsyncMock, patch

import pytest

from cargo_mcp.models import CommandResult
from cargo_mcp.services import CargoLaunchError
from cargo_mcp.tools import cargo as cargo_tools


@pytest.fixture
def mock_runner() -> Iterator[AsyncMock]:
    """Patch the runner used by the tools."""
    runner = AsyncMock(
        return_value=CommandResult(stdout="", stderr="Finished", exit_code=0)
    )
    with patch("cargo_mcp.tools.cargo.run_cargo_command", runner):
        yield runner


class TestCommonArgs:
    """Tests for the shared release/verbose flags."""

    def test_no_flags(self) -> None:
        assert cargo_tools.common_args() == []

    def test_release_before_verbose(self) -> None:
        assert cargo_tools.common_args(release=True, verbose=True) == [
            "--release",
            "--verbose",
        ]


class TestTools:
    """Each tool maps its parameters to cargo arguments."""

    @pytest.mark.asyncio
    async def test_build_with_all_options(self, mock_runner: AsyncMock) -> None:
        """build passes target and comma-joined features."""
        await cargo_tools.build(
            cwd="/proj",
            release=True,
            verbose=True,
            target="wasm32-unknown-unknown",
            features=["serde", "async"],
        )

        mock_runner.assert_awaited_once_with(
            "build",
            [
                "--release",
                "--verbose",
                "--target",
                "wasm32-unknown-unknown",
                "--features",
                "serde,async",
            ],
            "/proj",
        )

    @pytest.mark.asyncio
    async def test_build_ignores_empty_features(self, mock_runner: AsyncMock) -> None:
        await cargo_tools.build(cwd="/proj", features=[])

        mock_runner.assert_awaited_once_with("build", [], "/proj")

    @pytest.mark.asyncio
    async def test_run_passes_program_args_after_separator(
        self, mock_runner: AsyncMock
    ) -> None:
        await cargo_tools.run(cwd="/proj", release=True, args=["--port", "8080"])

        mock_runner.assert_awaited_once_with(
            "run", ["--release", "--", "--port", "8080"], "/proj"
        )

    @pytest.mark.asyncio
    async def test_run_without_args_has_no_separator(
        self, mock_runner: AsyncMock
    ) -> None:
        await cargo_tools.run(cwd="/proj")

        mock_runner.assert_awaited_once_with("run", [], "/proj")

    @pytest.mark.asyncio
    async def test_test_with_filter_and_nocapture(self, mock_runner: AsyncMock) -> None:
        """--nocapture goes to the test harness after `--`."""
        await cargo_tools.test(
            cwd="/proj", verbose=True, test_name="parses_", no_capture=True
        )

        mock_runner.assert_awaited_once_with(
            "test", ["--verbose", "parses_", "--", "--nocapture"], "/proj"
        )

    @pytest.mark.asyncio
    async def test_check(self, mock_runner: AsyncMock) -> None:
        await cargo_tools.check(cwd="/proj", release=True)

        mock_runner.assert_awaited_once_with("check", ["--release"], "/proj")

    @pytest.mark.asyncio
    async def test_fmt_check_mode(self, mock_runner: AsyncMock) -> None:
        await cargo_tools.fmt(cwd="/proj", check=True)

        mock_runner.assert_awaited_once_with("fmt", ["--check"], "/proj")

    @pytest.mark.asyncio
    async def test_fmt_default_rewrites(self, mock_runner: AsyncMock) -> None:
        await cargo_tools.fmt(cwd="/proj")

        mock_runner.assert_awaited_once_with("fmt", [], "/proj")

    @pytest.mark.asyncio
    async def test_clippy_fix(self, mock_runner: AsyncMock) -> None:
        await cargo_tools.clippy(cwd="/proj", verbose=True, fix=True)

        mock_runner.assert_awaited_once_with("clippy", ["--verbose", "--fix"], "/proj")

    @pytest.mark.asyncio
    async def test_add_dev_flag_comes_first(self, mock_runner: AsyncMock) -> None:
        """--dev precedes the dependency names."""
        await cargo_tools.add(dependencies=["some-lib"], cwd="/proj", dev=True)

        mock_runner.assert_awaited_once_with("add", ["--dev", "some-lib"], "/proj")

    @pytest.mark.asyncio
    async def test_add_keeps_dependency_order(self, mock_runner: AsyncMock) -> None:
        await cargo_tools.add(dependencies=["tokio@1", "serde", "anyhow"], cwd="/proj")

        mock_runner.assert_awaited_once_with(
            "add", ["tokio@1", "serde", "anyhow"], "/proj"
        )

    @pytest.mark.asyncio
    async def test_cwd_defaults_to_process_directory(
        self, mock_runner: AsyncMock
    ) -> None:
        await cargo_tools.check()

        mock_runner.assert_awaited_once_with("check", [], os.getcwd())


class TestToolOutput:
    """Tool return values."""

    @pytest.mark.asyncio
    async def test_returns_formatted_result(self, mock_runner: AsyncMock) -> None:
        mock_runner.return_value = CommandResult(
            stdout="", stderr="error[E0308]: mismatched types", exit_code=101
        )

        output = await cargo_tools.build(cwd="/proj")

        assert output == "STDERR:\nerror[E0308]: mismatched types\nExit code: 101"

    @pytest.mark.asyncio
    async def test_launch_failure_returns_error_text(self) -> None:
        """A missing cargo binary is reported as text, not raised."""
        error = CargoLaunchError(
            "cargo", "/proj", FileNotFoundError(2, "No such file or directory")
        )
        runner = AsyncMock(side_effect=error)

        with patch("cargo_mcp.tools.cargo.run_cargo_command", runner):
            output = await cargo_tools.check(cwd="/proj")

        assert output.startswith("Error: Failed to launch cargo in /proj")
        assert "No such file or directory" in output
