"""Tests for the videolinks CLI entrypoint."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from videolinks.interfaces.cli import cli

_MODULE = "videolinks.interfaces.cli.cli"


@pytest.fixture(autouse=True)
def _no_server_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("HOST", raising=False)
    monkeypatch.delenv("PORT", raising=False)


class TestCliOverrides:
    def test_no_flags_no_overrides(self) -> None:
        assert cli._cli_overrides(cli._parse_args([])) == {}

    def test_flags_map_to_flat_keys(self) -> None:
        args = cli._parse_args(
            ["--log-level", "DEBUG", "--no-headless", "--max-retries", "0"]
        )
        assert cli._cli_overrides(args) == {
            "log_level": "DEBUG",
            "playwright_headless": False,
            "max_retries": 0,
        }


class TestStart:
    @patch(f"{_MODULE}.uvicorn.run")
    @patch(f"{_MODULE}.configure_logging", return_value={"version": 1})
    def test_defaults_to_port_3000(
        self, mock_logging: MagicMock, mock_run: MagicMock
    ) -> None:
        cli.start([])

        mock_logging.assert_called_once()
        _, kwargs = mock_run.call_args
        assert kwargs["host"] == "0.0.0.0"
        assert kwargs["port"] == 3000
        assert kwargs["log_config"] == {"version": 1}

    @patch(f"{_MODULE}.uvicorn.run")
    @patch(f"{_MODULE}.configure_logging", return_value={"version": 1})
    def test_port_from_env_and_flag(
        self,
        mock_logging: MagicMock,
        mock_run: MagicMock,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setenv("PORT", "8081")
        cli.start([])
        assert mock_run.call_args.kwargs["port"] == 8081

        cli.start(["--port", "9000", "--host", "127.0.0.1"])
        assert mock_run.call_args.kwargs["port"] == 9000
        assert mock_run.call_args.kwargs["host"] == "127.0.0.1"

    @patch(f"{_MODULE}.uvicorn.run")
    @patch(f"{_MODULE}.configure_logging", return_value={"version": 1})
    def test_cli_flags_reach_config(
        self, mock_logging: MagicMock, mock_run: MagicMock
    ) -> None:
        cli.start(["--max-retries", "5"])
        config = mock_logging.call_args.args[0]
        assert config.max_retries == 5
