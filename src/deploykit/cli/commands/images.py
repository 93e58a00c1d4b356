# topmark:header:start
#
#   project      : DeployKit
#   file         : images.py
#   file_relpath : src/deploykit/cli/commands/images.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""DeployKit `images` command.

Lists the image configurations bound from the ``[kubernetes]`` block.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import click

from deploykit.cli.cmd_common import build_extension, get_console, is_verbose
from deploykit.cli.options import (
    CONTEXT_SETTINGS,
    OutputFormat,
    common_project_options,
    output_format_option,
)
from deploykit.config.io import to_toml
from deploykit.constants import VALUE_NOT_SET

if TYPE_CHECKING:
    from pathlib import Path

    from deploykit.config.model import ImageConfiguration
    from deploykit.config.properties import PropertySource


def _image_summary(image: ImageConfiguration) -> dict[str, object]:
    summary: dict[str, object] = {
        "name": image.name,
        "alias": image.alias,
        "registry": image.registry,
    }
    if image.build is not None:
        summary["from"] = image.build.from_
        summary["tags"] = list(image.build.tags)
    return summary


@click.command(
    name="images",
    context_settings=CONTEXT_SETTINGS,
    help="List the configured images.",
)
@common_project_options
@output_format_option
def images_command(
    *,
    project_dir: Path,
    config_path: Path | None,
    properties: PropertySource,
    output_format: OutputFormat,
) -> None:
    """List the configured images (name, alias, registry).

    Prints nothing in text mode when no image was declared.
    """
    ctx = click.get_current_context()
    console = get_console(ctx)

    extension = build_extension(
        project_dir=project_dir,
        config_path=config_path,
        properties=properties,
    )
    images = extension.images or []
    summaries = [_image_summary(image) for image in images]

    if output_format == OutputFormat.JSON:
        console.print(json.dumps(summaries, indent=2))
        return
    if output_format == OutputFormat.TOML:
        console.print(to_toml({"images": summaries}).rstrip("\n"))
        return

    verbose = is_verbose(ctx)
    for image in images:
        line = console.styled(image.name or VALUE_NOT_SET, bold=True)
        if image.alias:
            line += f" (alias: {image.alias})"
        if image.registry:
            line += f" registry={image.registry}"
        console.print(line)
        if verbose and image.build is not None:
            console.print(f"    from: {image.build.from_ or VALUE_NOT_SET}")
            if image.build.tags:
                console.print(f"    tags: {', '.join(image.build.tags)}")
