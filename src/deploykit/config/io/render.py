# topmark:header:start
#
#   project      : DeployKit
#   file         : render.py
#   file_relpath : src/deploykit/config/io/render.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Render resolved settings for dumps.

Effective values include `Path` and `Enum` instances, and TOML has no `null`.
`to_plain` normalizes values to TOML/JSON-friendly scalars; `to_toml` also
strips ``None`` entries before serializing with `tomlkit`.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from pathlib import PurePath
from typing import TYPE_CHECKING, Any, cast

import tomlkit

from deploykit.config.logging import get_logger

if TYPE_CHECKING:
    from deploykit.config.logging import DeployKitLogger

    from .types import TomlTable

logger: DeployKitLogger = get_logger(__name__)


def to_plain(value: object) -> object:
    """Convert paths to strings and enums to their member names, recursively."""
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, PurePath):
        return str(value)
    if isinstance(value, Mapping):
        m: Mapping[object, object] = cast("Mapping[object, object]", value)
        return {str(k): to_plain(v) for k, v in m.items()}
    if isinstance(value, (list, tuple)):
        return [to_plain(v) for v in cast("list[object]", value)]
    return value


def _strip_none_for_toml(value: object) -> object:
    """Remove TOML-incompatible `None` from mappings/lists."""
    if isinstance(value, Mapping):
        out: dict[str, object] = {}
        m: Mapping[object, object] = cast("Mapping[object, object]", value)
        for k_any, v_any in m.items():
            if v_any is None:
                logger.debug("Ignoring `None` entry in Mapping for key %s", k_any)
                continue
            out[str(k_any)] = _strip_none_for_toml(v_any)
        return out

    if isinstance(value, list):
        return [_strip_none_for_toml(v) for v in cast("list[object]", value) if v is not None]

    return value


def to_toml(toml_dict: TomlTable) -> str:
    """Serialize a mapping to a TOML string.

    Args:
        toml_dict (TomlTable): Mapping to render; paths and enums are converted first.

    Returns:
        str: The rendered TOML document.
    """
    cleaned: Any = _strip_none_for_toml(to_plain(toml_dict))
    return cast("str", cast("Any", tomlkit).dumps(cast("Mapping[str, Any]", cleaned)))
