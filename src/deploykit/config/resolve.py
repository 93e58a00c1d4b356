# topmark:header:start
#
#   project      : DeployKit
#   file         : resolve.py
#   file_relpath : src/deploykit/config/resolve.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Layered setting resolution.

Every setting of the extension is resolved by one of the pure functions in this
module. Precedence, highest first:

1. **Property override**: a non-blank value in the `PropertySource`, parsed to
   the setting's kind. A value that does not parse raises `PropertyParseError`;
   it never falls through to the next tier.
2. **Declared value**: the value assigned in the configuration block
   (``None`` means the block did not assign it).
3. **Default**: supplied by the caller.

Path settings differ only in tier 1: a property override is always anchored on
the project base directory.

`resolve_enum` implements the two-tier rule (property, then a plain field) used
by the build strategy and resource file type settings.

Nothing here caches; each call re-reads the property source.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, TypeVar

from deploykit.config.errors import PropertyParseError
from deploykit.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from deploykit.config.logging import DeployKitLogger
    from deploykit.config.properties import PropertySource

logger: DeployKitLogger = get_logger(__name__)

T = TypeVar("T")
E = TypeVar("E", bound=Enum)

_TRUE_TOKENS: frozenset[str] = frozenset({"true"})
_FALSE_TOKENS: frozenset[str] = frozenset({"false"})


def parse_bool(key: str, value: str) -> bool:
    """Parse a boolean property value (``true``/``false``, case-insensitive)."""
    token: str = value.strip().lower()
    if token in _TRUE_TOKENS:
        return True
    if token in _FALSE_TOKENS:
        return False
    raise PropertyParseError(key, value, "boolean")


def parse_int(key: str, value: str) -> int:
    """Parse a base-10 integer property value."""
    try:
        return int(value.strip(), 10)
    except ValueError as exc:
        raise PropertyParseError(key, value, "integer") from exc


def _resolve(
    properties: PropertySource,
    key: str,
    declared: T | None,
    default: T,
    parse: Callable[[str], T],
) -> T:
    raw: str | None = properties.get(key)
    if raw is not None:
        value: T = parse(raw)
        logger.trace("%s = %r (property)", key, value)
        return value
    if declared is not None:
        logger.trace("%s = %r (declared)", key, declared)
        return declared
    logger.trace("%s = %r (default)", key, default)
    return default


def resolve_bool(
    properties: PropertySource,
    key: str,
    declared: bool | None,
    default: bool,
) -> bool:
    """Resolve a boolean setting.

    Args:
        properties (PropertySource): Ambient property overrides.
        key (str): Property key of the setting.
        declared (bool | None): Value assigned in the block, or None if unset.
        default (bool): Fallback value.

    Returns:
        bool: The effective value.

    Raises:
        PropertyParseError: If the property is present but not ``true``/``false``.
    """
    return _resolve(properties, key, declared, default, lambda raw: parse_bool(key, raw))


def resolve_int(
    properties: PropertySource,
    key: str,
    declared: int | None,
    default: int,
) -> int:
    """Resolve an integer setting.

    Raises:
        PropertyParseError: If the property is present but not an integer.
    """
    return _resolve(properties, key, declared, default, lambda raw: parse_int(key, raw))


def resolve_str(
    properties: PropertySource,
    key: str,
    declared: str | None,
    default: str | None,
) -> str | None:
    """Resolve a string setting; the property value is returned verbatim."""
    return _resolve(properties, key, declared, default, lambda raw: raw)


def resolve_path(
    properties: PropertySource,
    key: str,
    declared: Path | None,
    default: Path,
    *,
    base_directory: Path,
) -> Path:
    """Resolve a path setting.

    A property override is interpreted as a path relative to ``base_directory``
    (``/proj`` + ``out/m.yml`` -> ``/proj/out/m.yml``); the declared and
    default tiers are returned untouched, absolute or not.

    Args:
        properties (PropertySource): Ambient property overrides.
        key (str): Property key of the setting.
        declared (Path | None): Path assigned in the block, or None if unset.
        default (Path): Fallback path, usually computed from project directories.
        base_directory (Path): Project base directory anchoring property overrides.

    Returns:
        Path: The effective path. No filesystem access takes place.
    """
    return _resolve(properties, key, declared, default, lambda raw: base_directory / raw)


def resolve_enum(
    properties: PropertySource,
    key: str,
    enum_cls: type[E],
    fallback: E,
) -> E:
    """Resolve an enumerated setting using the two-tier rule.

    The property value must be the exact name of an ``enum_cls`` member. When
    the property is absent, ``fallback`` (the in-memory field value) is
    returned; the declared-value tier is not consulted.

    Raises:
        PropertyParseError: If the property names no member of ``enum_cls``.
    """
    raw: str | None = properties.get(key)
    if raw is None:
        logger.trace("%s = %s (field)", key, fallback.name)
        return fallback
    member: E | None = enum_cls.__members__.get(raw)
    if member is None:
        choices: str = ", ".join(enum_cls.__members__)
        raise PropertyParseError(key, raw, f"one of {choices}")
    logger.trace("%s = %s (property)", key, member.name)
    return member
