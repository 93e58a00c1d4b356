# topmark:header:start
#
#   project      : DeployKit
#   file         : loaders.py
#   file_relpath : src/deploykit/config/io/loaders.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Load the extension block from TOML configuration files.

Sources, in order of preference inside a project directory:

- ``deploykit.toml`` with a ``[kubernetes]`` table;
- ``pyproject.toml`` with a ``[tool.deploykit.kubernetes]`` table.

An explicit path bypasses discovery. Parsing is done with `tomlkit` and
returned as plain `dict` structures, preserving document order (the
repeatable-collection merge policy depends on it).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Final, cast

import tomlkit
from tomlkit.exceptions import TOMLKitError

from deploykit.config.dsl import evaluate_block
from deploykit.config.errors import BindingError, ConfigFileError
from deploykit.config.extension import KubernetesExtension
from deploykit.config.keys import Toml
from deploykit.config.logging import get_logger

if TYPE_CHECKING:
    from pathlib import Path

    from deploykit.config.logging import DeployKitLogger
    from deploykit.config.project import ProjectContext

    from .types import TomlTable

logger: DeployKitLogger = get_logger(__name__)

DEPLOYKIT_TOML_NAME: Final[str] = "deploykit.toml"
PYPROJECT_TOML_NAME: Final[str] = "pyproject.toml"


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path (Path): Path to a TOML document (``deploykit.toml`` or ``pyproject.toml``).

    Returns:
        TomlTable: The parsed TOML content as plain dicts.

    Raises:
        ConfigFileError: If the file cannot be read or is not valid TOML.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigFileError(f"Cannot read {path}: {e}") from e
    try:
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
        data_any: Any = doc.unwrap()
    except TOMLKitError as e:
        # Covers syntax errors and semantic ones such as duplicate keys.
        raise ConfigFileError(f"Invalid TOML in {path}: {e}") from e
    return cast("TomlTable", data_any) if isinstance(data_any, dict) else {}


def discover_config_file(project_dir: Path) -> Path | None:
    """Return the config file declaring the extension block in ``project_dir``, if any.

    ``deploykit.toml`` wins over ``pyproject.toml``; a ``pyproject.toml``
    without a ``[tool.deploykit]`` table is ignored.
    """
    candidate: Path = project_dir / DEPLOYKIT_TOML_NAME
    if candidate.is_file():
        return candidate
    pyproject: Path = project_dir / PYPROJECT_TOML_NAME
    if pyproject.is_file():
        tool: Any = load_toml_dict(pyproject).get(Toml.SECTION_TOOL, {})
        if isinstance(tool, dict) and Toml.SECTION_DEPLOYKIT in tool:
            return pyproject
        logger.debug("%s has no [tool.%s] table", pyproject, Toml.SECTION_DEPLOYKIT)
    return None


def extract_kubernetes_block(data: TomlTable, path: Path) -> TomlTable:
    """Return the ``[kubernetes]`` block of a parsed config file (empty if absent).

    Args:
        data (TomlTable): Parsed file content.
        path (Path): The file, used to pick the nesting (``pyproject.toml`` nests
            under ``[tool.deploykit]``).

    Raises:
        BindingError: If the block exists but is not a table.
    """
    root: Any = data
    if path.name == PYPROJECT_TOML_NAME:
        tool: Any = data.get(Toml.SECTION_TOOL, {})
        root = tool.get(Toml.SECTION_DEPLOYKIT, {}) if isinstance(tool, dict) else {}
    block: Any = root.get(Toml.SECTION_KUBERNETES, {}) if isinstance(root, dict) else {}
    if not isinstance(block, dict):
        raise BindingError(
            Toml.SECTION_KUBERNETES,
            f"expected a table, got {type(block).__name__}",
        )
    return cast("TomlTable", block)


def load_extension(
    project: ProjectContext,
    config_path: Path | None = None,
) -> KubernetesExtension:
    """Create the extension for ``project`` and evaluate its configuration block.

    Args:
        project (ProjectContext): Project directories and property overrides.
        config_path (Path | None): Explicit config file; when None the file is
            discovered in the project base directory. No file means an
            extension with nothing declared.

    Returns:
        KubernetesExtension: The configured extension.

    Raises:
        ConfigFileError: If the config file is unreadable or malformed.
        BindingError: If the block does not bind.
    """
    extension = KubernetesExtension(project)
    path: Path | None = config_path or discover_config_file(project.base_directory)
    if path is None:
        logger.info("No configuration file found in %s", project.base_directory)
        return extension

    logger.info("Loading configuration from %s", path)
    block: TomlTable = extract_kubernetes_block(load_toml_dict(path), path)
    return evaluate_block(extension, block, config_dir=path.parent.absolute())
