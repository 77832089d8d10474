"""Tests for CLI help flags and command wiring."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from runner_directives.cli.app import app
from runner_directives.core.config import DEFAULT_OUTPUT, DEFAULT_PATTERNS, SettingsError, get_settings

runner = CliRunner()


@pytest.mark.parametrize(
    "args",
    [
        [],
        ["extract"],
        ["transform"],
        ["check"],
        ["watch"],
    ],
    ids=["root", "extract", "transform", "check", "watch"],
)
def test_short_help_flag(args: list[str]) -> None:
    result = runner.invoke(app, [*args, "-h"])
    assert result.exit_code == 0
    assert "Usage" in result.output


def test_extract_uses_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("RUNNERS_PATTERNS", "RUNNERS_OUTPUT", "RUNNERS_CWD", "RUNNERS_WORKERS"):
        monkeypatch.delenv(name, raising=False)

    with patch("runner_directives.cli.extract.run_extract", return_value=([], Path(DEFAULT_OUTPUT))) as mock_run:
        result = runner.invoke(app, ["extract"])

    assert result.exit_code == 0
    mock_run.assert_called_once_with(DEFAULT_PATTERNS, DEFAULT_OUTPUT, cwd=".", workers=1)
    assert "Extracted metadata from 0 files" in result.output


def test_extract_passes_flags() -> None:
    with patch("runner_directives.cli.extract.run_extract", return_value=([], Path("out.json"))) as mock_run:
        result = runner.invoke(
            app, ["extract", "--patterns", "lib/*.ts", "--output", "out.json", "--cwd", "proj", "--workers", "3"]
        )

    assert result.exit_code == 0
    mock_run.assert_called_once_with("lib/*.ts", "out.json", cwd="proj", workers=3)


def test_extract_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RUNNERS_PATTERNS", "app/**/*.ts")
    monkeypatch.setenv("RUNNERS_OUTPUT", "build/index.json")
    monkeypatch.setenv("RUNNERS_WORKERS", "2")

    settings = get_settings()

    assert settings.patterns == "app/**/*.ts"
    assert settings.output == "build/index.json"
    assert settings.cwd == "."
    assert settings.workers == 2


@pytest.mark.parametrize("value", ["many", "0", "-2"])
def test_invalid_workers_environment_is_rejected(monkeypatch: pytest.MonkeyPatch, value: str) -> None:
    monkeypatch.setenv("RUNNERS_WORKERS", value)

    with pytest.raises(SettingsError, match="RUNNERS_WORKERS must be a positive integer"):
        get_settings()


def test_extract_reports_invalid_workers_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RUNNERS_WORKERS", "many")

    with patch("runner_directives.cli.extract.run_extract") as mock_run:
        result = runner.invoke(app, ["extract"])

    assert result.exit_code == 1
    assert result.exception is None or isinstance(result.exception, SystemExit)
    mock_run.assert_not_called()


def test_extract_rejects_zero_workers_flag() -> None:
    with patch("runner_directives.cli.extract.run_extract") as mock_run:
        result = runner.invoke(app, ["extract", "--workers", "0"])

    assert result.exit_code == 2
    mock_run.assert_not_called()
