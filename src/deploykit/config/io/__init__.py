# topmark:header:start
#
#   project      : DeployKit
#   file         : __init__.py
#   file_relpath : src/deploykit/config/io/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TOML I/O helpers for DeployKit configuration.

DeployKit uses `tomlkit` for parsing and rendering:

- `load_toml_dict()` parses on-disk TOML and returns plain dicts (document order kept).
- `load_extension()` discovers the config file, extracts ``[kubernetes]`` and
  evaluates it against a fresh `KubernetesExtension`.
- `to_toml()` renders resolved settings (stripping ``None``).
"""

from __future__ import annotations

from .loaders import (
    DEPLOYKIT_TOML_NAME,
    PYPROJECT_TOML_NAME,
    discover_config_file,
    extract_kubernetes_block,
    load_extension,
    load_toml_dict,
)
from .render import to_plain, to_toml
from .types import TomlTable

__all__: list[str] = [
    "DEPLOYKIT_TOML_NAME",
    "PYPROJECT_TOML_NAME",
    "TomlTable",
    "discover_config_file",
    "extract_kubernetes_block",
    "load_extension",
    "load_toml_dict",
    "to_plain",
    "to_toml",
]
