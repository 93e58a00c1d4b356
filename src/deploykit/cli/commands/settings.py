# topmark:header:start
#
#   project      : DeployKit
#   file         : settings.py
#   file_relpath : src/deploykit/cli/commands/settings.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""DeployKit `settings` command.

Prints every effective setting of the ``kubernetes`` extension, after
applying project properties (``-D``), the configuration file and defaults.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import click

from deploykit.cli.cmd_common import build_extension, config_errors, get_console, is_verbose
from deploykit.cli.options import (
    CONTEXT_SETTINGS,
    OutputFormat,
    common_project_options,
    output_format_option,
)
from deploykit.config.io import to_plain, to_toml
from deploykit.config.settings import SETTINGS_BY_NAME
from deploykit.constants import TOML_BLOCK_END, TOML_BLOCK_START, VALUE_NOT_SET

if TYPE_CHECKING:
    from pathlib import Path

    from deploykit.config.properties import PropertySource


def _text_value(value: Any) -> str:
    if value is None:
        return VALUE_NOT_SET
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(to_plain(value))


@click.command(
    name="settings",
    context_settings=CONTEXT_SETTINGS,
    help="Show the effective settings of the kubernetes extension.",
)
@common_project_options
@output_format_option
def settings_command(
    *,
    project_dir: Path,
    config_path: Path | None,
    properties: PropertySource,
    output_format: OutputFormat,
) -> None:
    """Show the effective settings of the kubernetes extension.

    Args:
        project_dir (Path): Project base directory.
        config_path (Path | None): Explicit configuration file.
        properties (PropertySource): Properties from ``-D`` definitions.
        output_format (OutputFormat): Rendering of the result.
    """
    ctx = click.get_current_context()
    console = get_console(ctx)

    extension = build_extension(
        project_dir=project_dir,
        config_path=config_path,
        properties=properties,
    )
    with config_errors():
        effective: dict[str, Any] = extension.effective_settings()

    if output_format == OutputFormat.JSON:
        console.print(json.dumps(to_plain(effective), indent=2))
        return

    if output_format == OutputFormat.TOML:
        verbose = is_verbose(ctx)
        if verbose:
            console.print(TOML_BLOCK_START)
        console.print(to_toml(effective).rstrip("\n"))
        if verbose:
            console.print(TOML_BLOCK_END)
        return

    width = max(len(name) for name in effective)
    verbose = is_verbose(ctx)
    for name, value in effective.items():
        shown = _text_value(value)
        line = f"{name:<{width}} = {console.styled(shown, bold=True)}"
        setting = SETTINGS_BY_NAME.get(name)
        if verbose and setting is not None:
            line += console.styled(f"  ({setting.key})", dim=True)
        console.print(line)
