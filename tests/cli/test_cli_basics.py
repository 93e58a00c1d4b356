# topmark:header:start
#
#   project      : DeployKit
#   file         : test_cli_basics.py
#   file_relpath : tests/cli/test_cli_basics.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI tests: group behaviour, `version`, verbosity and color options."""

from __future__ import annotations

import json
import logging

import pytest

from deploykit.cli.options import ColorMode, resolve_color_mode, resolve_verbosity
from deploykit.config.logging import TRACE_LEVEL
from deploykit.constants import DEPLOYKIT_VERSION
from tests.cli.conftest import assert_SUCCESS, assert_USAGE_ERROR, run_cli
from tests.conftest import mark_cli, parametrize


@mark_cli
def test_no_subcommand_prints_hint_and_help() -> None:
    """Running the bare group prints a hint followed by the help text."""
    result = run_cli([])
    assert_SUCCESS(result)
    assert "deploykit settings" in result.output
    for command in ("settings", "images", "manifest", "version"):
        assert command in result.output


@mark_cli
def test_version_plain() -> None:
    """`version` prints the installed version."""
    result = run_cli(["--no-color", "version"])
    assert_SUCCESS(result)
    assert result.stdout.strip() == DEPLOYKIT_VERSION


@mark_cli
def test_version_json() -> None:
    """`version --format json` is machine-readable."""
    result = run_cli(["version", "--format", "JSON"])
    assert_SUCCESS(result)
    assert json.loads(result.stdout) == {"version": DEPLOYKIT_VERSION}


@mark_cli
def test_invalid_format_is_rejected() -> None:
    """Unknown ``--format`` values are a Click usage error."""
    result = run_cli(["version", "--format", "yaml"])
    assert result.exit_code == 2
    assert "Must be one of: text, json, toml" in result.output


@mark_cli
def test_verbose_and_quiet_are_exclusive() -> None:
    """``-v`` together with ``-q`` exits with USAGE_ERROR."""
    result = run_cli(["-v", "-q", "version"])
    assert_USAGE_ERROR(result)
    assert "mutually exclusive" in result.output


@mark_cli
@parametrize(
    "verbose, quiet, expected",
    [
        (0, 0, logging.WARNING),
        (1, 0, logging.INFO),
        (2, 0, logging.DEBUG),
        (3, 0, TRACE_LEVEL),
        (5, 0, TRACE_LEVEL),
        (0, 1, logging.ERROR),
        (0, 2, logging.ERROR),
    ],
)
def test_resolve_verbosity(verbose: int, quiet: int, expected: int) -> None:
    """Counts of ``-v``/``-q`` map onto logging levels."""
    assert resolve_verbosity(verbose, quiet) == expected


@mark_cli
def test_resolve_color_mode(monkeypatch: pytest.MonkeyPatch) -> None:
    """Machine formats and explicit modes win over the environment."""
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.setenv("FORCE_COLOR", "1")
    assert resolve_color_mode(cli_mode=ColorMode.AUTO, output_format="json") is False
    assert resolve_color_mode(cli_mode=ColorMode.NEVER, output_format=None) is False
    assert resolve_color_mode(cli_mode=ColorMode.AUTO, output_format=None) is True

    monkeypatch.delenv("FORCE_COLOR")
    monkeypatch.setenv("NO_COLOR", "1")
    assert resolve_color_mode(cli_mode=ColorMode.ALWAYS, output_format=None) is True
    assert resolve_color_mode(cli_mode=None, output_format=None, stdout_isatty=True) is False

    monkeypatch.delenv("NO_COLOR")
    assert resolve_color_mode(cli_mode=None, output_format=None, stdout_isatty=True) is True
    assert resolve_color_mode(cli_mode=None, output_format=None, stdout_isatty=False) is False


@mark_cli
def test_env_log_level_overrides_flags(monkeypatch: pytest.MonkeyPatch) -> None:
    """``DEPLOYKIT_LOG_LEVEL`` wins over ``-q`` for internal logging."""
    monkeypatch.setenv("DEPLOYKIT_LOG_LEVEL", "DEBUG")
    result = run_cli(["-q", "version"])
    assert_SUCCESS(result)
    assert logging.getLogger().level == logging.DEBUG
