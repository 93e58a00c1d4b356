# topmark:header:start
#
#   project      : DeployKit
#   file         : cmd_common.py
#   file_relpath : src/deploykit/cli/cmd_common.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Helpers shared by the DeployKit subcommands.

Builds the project context and the configured extension from the common
project options, translating configuration errors into CLI errors.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING

from deploykit.cli.errors import DeployKitConfigurationError
from deploykit.config.errors import DeployKitConfigError
from deploykit.config.io import load_extension
from deploykit.config.logging import get_logger
from deploykit.config.project import ProjectContext

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    import click

    from deploykit.cli.console import ClickConsole
    from deploykit.config.extension import KubernetesExtension
    from deploykit.config.properties import PropertySource

logger = get_logger(__name__)


def get_console(ctx: click.Context) -> ClickConsole:
    """Return the console stored on the Click context by the group."""
    ctx.ensure_object(dict)
    return ctx.obj["console"]


def is_verbose(ctx: click.Context) -> bool:
    """Return True when ``-v`` (or more) was given on the group."""
    level = int(ctx.obj.get("verbosity_level", logging.WARNING)) if ctx.obj else logging.WARNING
    return level <= logging.INFO


@contextmanager
def config_errors() -> Iterator[None]:
    """Re-raise configuration errors as `DeployKitConfigurationError`."""
    try:
        yield
    except DeployKitConfigError as exc:
        logger.debug("Configuration error: %r", exc)
        raise DeployKitConfigurationError.from_config_error(exc) from exc


def build_extension(
    *,
    project_dir: Path,
    config_path: Path | None,
    properties: PropertySource,
) -> KubernetesExtension:
    """Create the project context and load the configured extension.

    Args:
        project_dir (Path): Project base directory.
        config_path (Path | None): Explicit config file, or None to discover one.
        properties (PropertySource): Properties from ``-D`` definitions.

    Returns:
        KubernetesExtension: The extension with its configuration block applied.

    Raises:
        DeployKitConfigurationError: If the configuration cannot be loaded or bound.
    """
    project = ProjectContext.from_base(project_dir, properties)
    logger.debug("Project context: %r", project)
    with config_errors():
        return load_extension(project, config_path)
