# topmark:header:start
#
#   project      : DeployKit
#   file         : properties.py
#   file_relpath : src/deploykit/config/properties.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Ambient project properties (the highest-precedence configuration tier).

A `PropertySource` is an immutable, ordered mapping of dotted keys to raw
string values. It is usually built from ``-D KEY=VALUE`` definitions given on
the command line.

Presence rule:
    A property is *present* only when its value is non-blank.
    `PropertySource.get` returns ``None`` for missing keys **and** for keys whose
    value is empty or whitespace-only, so absent CLI flags pass through to the
    next tier harmlessly.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING

from deploykit.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable

    from deploykit.config.logging import DeployKitLogger

logger: DeployKitLogger = get_logger(__name__)


class PropertySource(Mapping[str, str]):
    """Read-only key→string mapping of project properties.

    Iteration and ``[]`` expose the raw values (blank ones included); use
    `get` for the presence-aware lookup the resolvers rely on.
    """

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[str, str] | None = None) -> None:
        self._values: Mapping[str, str] = MappingProxyType(dict(values or {}))

    def __getitem__(self, key: str) -> str:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"PropertySource({dict(self._values)!r})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the property value, or ``default`` when absent or blank.

        Args:
            key (str): Dotted property key, e.g. ``deploykit.namespace``.
            default (str | None): Value returned when the property is not present.

        Returns:
            str | None: The raw (unstripped) value when non-blank, else ``default``.
        """
        value: str | None = self._values.get(key)
        if value is None or not value.strip():
            return default
        return value

    @classmethod
    def from_definitions(cls, definitions: Iterable[str]) -> PropertySource:
        """Build a property source from ``KEY=VALUE`` definitions.

        Later definitions of the same key win. The value may be empty
        (``KEY=``), which makes the key blank and therefore absent.

        Args:
            definitions (Iterable[str]): Raw definitions, e.g. from repeated ``-D`` options.

        Returns:
            PropertySource: The resulting property source.

        Raises:
            ValueError: If a definition has no ``=`` or an empty key.
        """
        values: dict[str, str] = {}
        for raw in definitions:
            key, sep, value = raw.partition("=")
            key = key.strip()
            if not sep or not key:
                raise ValueError(f"Invalid property definition {raw!r}; expected KEY=VALUE")
            values[key] = value
            logger.debug("Property %s=%r", key, value)
        return cls(values)
