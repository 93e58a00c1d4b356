# topmark:header:start
#
#   project      : DeployKit
#   file         : version.py
#   file_relpath : src/deploykit/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""DeployKit `version` command.

Prints the current DeployKit version as installed in the active Python environment.
"""

from __future__ import annotations

import json

import click

from deploykit.cli.cmd_common import get_console, is_verbose
from deploykit.cli.options import CONTEXT_SETTINGS, OutputFormat, output_format_option
from deploykit.config.io import to_toml
from deploykit.constants import DEPLOYKIT_VERSION


@click.command(
    name="version",
    context_settings=CONTEXT_SETTINGS,
    help="Show the current version of DeployKit.",
)
@output_format_option
def version_command(*, output_format: OutputFormat) -> None:
    """Show the current version of DeployKit.

    Args:
        output_format (OutputFormat): Rendering of the result.
    """
    ctx = click.get_current_context()
    console = get_console(ctx)

    if output_format == OutputFormat.JSON:
        console.print(json.dumps({"version": DEPLOYKIT_VERSION}))
    elif output_format == OutputFormat.TOML:
        console.print(to_toml({"version": DEPLOYKIT_VERSION}).rstrip("\n"))
    elif is_verbose(ctx):
        console.print(console.styled("DeployKit version:", bold=True, underline=True))
        console.print(f"    {console.styled(DEPLOYKIT_VERSION, bold=True)}")
    else:
        console.print(console.styled(DEPLOYKIT_VERSION, bold=True))
