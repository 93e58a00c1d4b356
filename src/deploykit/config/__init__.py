# topmark:header:start
#
#   project      : DeployKit
#   file         : __init__.py
#   file_relpath : src/deploykit/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration handling for DeployKit.

This package resolves the settings of the ``kubernetes`` extension from three
layers (project properties, the declarative ``[kubernetes]`` block, defaults)
and binds the block's structured sub-tables into typed objects.

Public entry points:
    - `KubernetesExtension`: the configuration root and its ``*_or_default`` accessors.
    - `ProjectContext` / `PropertySource`: the project collaborator and its properties.
    - `evaluate_block` / `load_extension`: apply a block, or discover and apply a file.
    - `bind_block` and friends: the block binder.
"""

from __future__ import annotations

from deploykit.config.binding import bind_block, bind_block_list, bind_block_map
from deploykit.config.dsl import evaluate_block
from deploykit.config.errors import (
    BindingError,
    ConfigFileError,
    DeployKitConfigError,
    PropertyParseError,
)
from deploykit.config.extension import KubernetesExtension
from deploykit.config.io import load_extension
from deploykit.config.project import ProjectContext
from deploykit.config.properties import PropertySource
from deploykit.config.types import BuildStrategy, ResourceFileType

__all__: list[str] = [
    "BindingError",
    "BuildStrategy",
    "ConfigFileError",
    "DeployKitConfigError",
    "KubernetesExtension",
    "ProjectContext",
    "PropertyParseError",
    "PropertySource",
    "ResourceFileType",
    "bind_block",
    "bind_block_list",
    "bind_block_map",
    "evaluate_block",
    "load_extension",
]
