# topmark:header:start
#
#   project      : DeployKit
#   file         : options.py
#   file_relpath : src/deploykit/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Common CLI option utilities for the DeployKit CLI.

This module centralizes reusable options (verbosity, color, project
selection, output format) and their resolution logic, so commands and the
group can stay thin. The helpers here are Click-aware.
"""

from __future__ import annotations

import logging
import os
import sys
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, ParamSpec, TypeVar

import click

from deploykit.cli.cli_types import EnumChoiceParam, PropertyDefinitionsParam
from deploykit.cli.errors import DeployKitUsageError
from deploykit.config.logging import TRACE_LEVEL

if TYPE_CHECKING:
    from collections.abc import Callable

P = ParamSpec("P")
R = TypeVar("R")


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Resolve the final logging level based on verbose and quiet counts.

    Args:
        verbose_count (int): Number of times the verbose flag (-v) is passed.
        quiet_count (int): Number of times the quiet flag (-q) is passed.

    Returns:
        int: The logging level.

    Raises:
        DeployKitUsageError: If both verbose and quiet flags are used simultaneously.

    Behavior:
        Three or more -v flags set TRACE level, two set DEBUG, one sets INFO.
        One or more -q flags set ERROR level. The default is WARNING, which
        keeps the cluster advisory visible.
    """
    if verbose_count > 0 and quiet_count > 0:
        raise DeployKitUsageError("The '--verbose' and '--quiet' options are mutually exclusive.")

    if verbose_count >= 3:  # -vvv
        return TRACE_LEVEL
    if verbose_count == 2:  # -vv
        return logging.DEBUG
    if verbose_count == 1:  # -v
        return logging.INFO

    if quiet_count >= 1:  # -q
        return logging.ERROR

    return logging.WARNING


#: Click context settings shared by the group and its subcommands.
CONTEXT_SETTINGS = {
    "help_option_names": ["-h", "--help"],
}


def common_verbose_options(f: Callable[P, R]) -> Callable[P, R]:
    """Adds --verbose and --quiet options to a command.

    Args:
        f (Callable[P, R]): The Click command function to decorate.

    Returns:
        Callable[P, R]: The decorated function with verbosity options added.
    """
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Increase verbosity. Specify up to three times for more detail.",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        count=True,
        help="Only report errors.",
    )(f)
    return f


class ColorMode(str, Enum):
    """User intent for colorized terminal output."""

    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


def resolve_color_mode(
    *,
    cli_mode: ColorMode | None,
    output_format: str | None,
    stdout_isatty: bool | None = None,
) -> bool:
    """Determine whether color output should be enabled.

    Args:
        cli_mode (ColorMode | None): Explicit color mode from CLI options.
        output_format (str | None): Output format string, e.g. "json".
        stdout_isatty (bool | None): Whether stdout is a TTY; if None, auto-detected.

    Returns:
        bool: True if color output should be enabled, False otherwise.

    Behavior:
        Machine formats (json, toml) never get color. Explicit CLI modes win,
        then ``FORCE_COLOR`` and ``NO_COLOR``, then whether stdout is a TTY.
    """
    if output_format and output_format.lower() in {"json", "toml"}:
        return False
    if cli_mode == ColorMode.ALWAYS:
        return True
    if cli_mode == ColorMode.NEVER:
        return False
    force_color = os.getenv("FORCE_COLOR")
    if force_color and force_color != "0":
        return True
    if os.getenv("NO_COLOR") is not None:
        return False
    if stdout_isatty is None:
        try:
            stdout_isatty = sys.stdout.isatty()
        except (AttributeError, ValueError):
            stdout_isatty = False
    return bool(stdout_isatty)


def common_color_options(f: Callable[P, R]) -> Callable[P, R]:
    """Adds --color and --no-color options to a command.

    Args:
        f (Callable[P, R]): The Click command function to decorate.

    Returns:
        Callable[P, R]: The decorated function with color options added.
    """
    f = click.option(
        "--color",
        "color_mode",
        type=EnumChoiceParam(ColorMode),
        default=None,
        help="Color output: auto (default), always, or never.",
    )(f)
    f = click.option(
        "--no-color",
        "no_color",
        is_flag=True,
        help="Disable color output (equivalent to --color=never).",
    )(f)
    return f


class OutputFormat(str, Enum):
    """Output format for command results.

    Members:
      TEXT: Human-friendly ``name = value`` lines; may include ANSI color.
      JSON: A single JSON object (machine-readable).
      TOML: A TOML document (machine-readable).
    """

    TEXT = "text"
    JSON = "json"
    TOML = "toml"


def output_format_option(f: Callable[P, R]) -> Callable[P, R]:
    """Adds the ``--format`` option to a command."""
    return click.option(
        "--format",
        "output_format",
        type=EnumChoiceParam(OutputFormat),
        default=OutputFormat.TEXT,
        show_default="text",
        help=f"Output format ({', '.join(v.value for v in OutputFormat)}).",
    )(f)


def common_project_options(f: Callable[P, R]) -> Callable[P, R]:
    """Adds the options selecting the project and its configuration.

    Adds ``--project-dir``, ``--config`` and the repeatable ``-D/--property``.

    Args:
        f (Callable[P, R]): The Click command function to decorate.

    Returns:
        Callable[P, R]: The decorated function.
    """
    f = click.option(
        "--project-dir",
        "project_dir",
        type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
        default=Path("."),
        show_default=True,
        help="Project base directory (config discovery and path defaults are relative to it).",
    )(f)
    f = click.option(
        "--config",
        "config_path",
        type=click.Path(exists=True, file_okay=True, dir_okay=False, path_type=Path),
        default=None,
        help="Configuration file to use instead of deploykit.toml / pyproject.toml discovery.",
    )(f)
    f = click.option(
        "-D",
        "--property",
        "properties",
        multiple=True,
        metavar="KEY=VALUE",
        callback=PropertyDefinitionsParam,
        help="Define a project property (repeatable); overrides the configuration file.",
    )(f)
    return f
