# topmark:header:start
#
#   project      : DeployKit
#   file         : dsl.py
#   file_relpath : src/deploykit/config/dsl.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Evaluate a ``[kubernetes]`` block against a `KubernetesExtension`.

Keys are applied in the key order of the parsed table, which for most files
is document order, so the merge policy of the repeatable collections is
visible in the file itself:

```toml
[[kubernetes.image]]        # appended
name = "first"

[[kubernetes.image]]        # appended
name = "second"

[kubernetes.images.only]    # replaces both entries above
name = "only"
```

Key dispatch:
    - scalar settings (see [`deploykit.config.settings`][]) -> ``declare``;
    - ``build_strategy`` / ``resource_file_type`` -> plain enum fields;
    - single blocks (``access``, ``resources``, ...) -> ``configure_*``;
    - ``images`` / ``mappings`` -> replace; ``image`` / ``mapping`` arrays ->
      one ``add_*`` call per entry.

Unknown keys are reported together, before anything is applied.

TOML gathers all ``[[kubernetes.image]]`` entries into one array placed where
the first entry appears. An entry written after ``[kubernetes.images.*]`` is
therefore applied before the replacement when an earlier entry exists, and the
replacement discards it. To append after a replacement, write every singular
entry below the plural table. The same holds for ``mapping`` and ``mappings``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from deploykit.config.binding import as_str, is_block, is_block_list
from deploykit.config.errors import BindingError
from deploykit.config.keys import Toml
from deploykit.config.logging import get_logger
from deploykit.config.settings import SETTINGS_BY_NAME
from deploykit.config.types import BuildStrategy, ResourceFileType

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from enum import Enum
    from pathlib import Path

    from deploykit.config.extension import KubernetesExtension
    from deploykit.config.logging import DeployKitLogger

logger: DeployKitLogger = get_logger(__name__)


def _single_block_handlers(
    extension: KubernetesExtension,
) -> dict[str, Callable[[Mapping[str, Any]], None]]:
    return {
        Toml.KEY_ACCESS: extension.configure_access,
        Toml.KEY_RESOURCES: extension.configure_resources,
        Toml.KEY_ENRICHER: extension.configure_enricher,
        Toml.KEY_GENERATOR: extension.configure_generator,
        Toml.KEY_MACHINE: extension.configure_machine,
        Toml.KEY_AUTH_CONFIG: extension.configure_auth_config,
        Toml.KEY_IMAGES: extension.configure_images,
        Toml.KEY_MAPPINGS: extension.configure_mappings,
    }


def _append_handlers(
    extension: KubernetesExtension,
) -> dict[str, Callable[[Mapping[str, Any]], None]]:
    return {
        Toml.KEY_IMAGE: extension.add_image,
        Toml.KEY_MAPPING: extension.add_mapping,
    }


_ENUM_FIELDS: dict[str, type[BuildStrategy] | type[ResourceFileType]] = {
    Toml.KEY_BUILD_STRATEGY: BuildStrategy,
    Toml.KEY_RESOURCE_FILE_TYPE: ResourceFileType,
}


def allowed_keys() -> frozenset[str]:
    """Return every key accepted directly under ``[kubernetes]``."""
    return frozenset(SETTINGS_BY_NAME) | frozenset(_ENUM_FIELDS) | {
        Toml.KEY_ACCESS,
        Toml.KEY_RESOURCES,
        Toml.KEY_ENRICHER,
        Toml.KEY_GENERATOR,
        Toml.KEY_MACHINE,
        Toml.KEY_AUTH_CONFIG,
        Toml.KEY_IMAGES,
        Toml.KEY_IMAGE,
        Toml.KEY_MAPPINGS,
        Toml.KEY_MAPPING,
    }


def _parse_enum_field(key: str, raw: object) -> Enum:
    enum_cls = _ENUM_FIELDS[key]
    where: str = f"{Toml.SECTION_KUBERNETES}.{key}"
    token: str = as_str(raw, where)
    member: Enum | None = enum_cls.from_name(token)
    if member is None:
        choices: str = ", ".join(enum_cls.__members__)
        raise BindingError(where, f"unknown value {token!r} (expected one of: {choices})")
    return member


def evaluate_block(
    extension: KubernetesExtension,
    block: Mapping[str, Any],
    *,
    config_dir: Path | None = None,
) -> KubernetesExtension:
    """Apply a ``[kubernetes]`` block to ``extension``.

    Args:
        extension (KubernetesExtension): The extension to fill.
        block (Mapping[str, Any]): The parsed ``[kubernetes]`` table.
        config_dir (Path | None): Directory of the declaring config file; relative
            path settings are anchored on it. ``None`` keeps them as written.

    Returns:
        KubernetesExtension: ``extension``, for chaining.

    Raises:
        BindingError: If the block holds unknown keys or any value fails to bind.
            The pass stops at the first failure.
    """
    if not is_block(block):
        raise BindingError(Toml.SECTION_KUBERNETES, f"expected a table, got {type(block).__name__}")

    allowed: frozenset[str] = allowed_keys()
    unknown: list[str] = [k for k in block if k not in allowed]
    if unknown:
        raise BindingError.for_unknown_fields(Toml.SECTION_KUBERNETES, unknown, sorted(allowed))

    single = _single_block_handlers(extension)
    append = _append_handlers(extension)

    for key, value in block.items():
        if key in SETTINGS_BY_NAME:
            extension.declare(key, value, relative_to=config_dir)
        elif key == Toml.KEY_BUILD_STRATEGY:
            extension.build_strategy = BuildStrategy(_parse_enum_field(key, value))
        elif key == Toml.KEY_RESOURCE_FILE_TYPE:
            extension.resource_file_type = ResourceFileType(_parse_enum_field(key, value))
        elif key in single:
            single[key](value)
        else:
            # Singular forms: a lone table or an array of tables, appended in order.
            entries: list[Any] = list(value) if is_block_list(value) else [value]
            for entry in entries:
                append[key](entry)
        logger.debug("Applied %s.%s", Toml.SECTION_KUBERNETES, key)

    return extension
