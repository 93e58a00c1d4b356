# topmark:header:start
#
#   project      : DeployKit
#   file         : manifest.py
#   file_relpath : src/deploykit/cli/commands/manifest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""DeployKit `manifest` command.

Prints the manifest the kubernetes extension would apply. No cluster is
contacted: ``--openshift`` simulates an OpenShift cluster so the advisory
warnings can be inspected.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import click

from deploykit.cli.cmd_common import build_extension, config_errors, get_console, is_verbose
from deploykit.cli.options import (
    CONTEXT_SETTINGS,
    OutputFormat,
    common_project_options,
    output_format_option,
)
from deploykit.config.cluster import StaticProbe
from deploykit.config.io import to_toml
from deploykit.config.logging import get_logger

if TYPE_CHECKING:
    from pathlib import Path

    from deploykit.config.properties import PropertySource

logger = get_logger(__name__)


@click.command(
    name="manifest",
    context_settings=CONTEXT_SETTINGS,
    help="Show the manifest that would be applied to the cluster.",
)
@common_project_options
@click.option(
    "--openshift",
    is_flag=True,
    default=False,
    help="Treat the target cluster as OpenShift (logs the cluster-type advisory).",
)
@output_format_option
def manifest_command(
    *,
    project_dir: Path,
    config_path: Path | None,
    properties: PropertySource,
    openshift: bool,
    output_format: OutputFormat,
) -> None:
    """Show the manifest that would be applied to the cluster.

    Args:
        project_dir (Path): Project base directory.
        config_path (Path | None): Explicit configuration file.
        properties (PropertySource): Properties from ``-D`` definitions.
        openshift (bool): Simulate an OpenShift cluster.
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
        manifest: Path = extension.get_manifest(None, StaticProbe(openshift), logger)
        resource_file_type = extension.resource_file_type_or_default()

    if output_format == OutputFormat.JSON:
        console.print(
            json.dumps(
                {"manifest": str(manifest), "resource_file_type": resource_file_type.name}
            )
        )
    elif output_format == OutputFormat.TOML:
        console.print(
            to_toml({"manifest": manifest, "resource_file_type": resource_file_type}).rstrip("\n")
        )
    elif is_verbose(ctx):
        console.print(console.styled("Manifest:", bold=True, underline=True))
        console.print(f"    {manifest}")
        console.print(f"    resource file type: {resource_file_type.name}")
    else:
        console.print(str(manifest))
