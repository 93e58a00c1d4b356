# topmark:header:start
#
#   project      : DeployKit
#   file         : errors.py
#   file_relpath : src/deploykit/config/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions raised while evaluating and resolving DeployKit configuration.

The config layer never catches these; they propagate to the caller of the
resolver or of the block evaluation that triggered them. The CLI maps them to
exit codes in [`deploykit.cli.errors`][deploykit.cli.errors].

Taxonomy:
    - `PropertyParseError`: a property override cannot be parsed to the kind of
      the setting it targets.
    - `BindingError`: a declarative block references unknown fields or carries a
      value of the wrong type.
    - `ConfigFileError`: a configuration file cannot be read or is not valid TOML.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence


class DeployKitConfigError(Exception):
    """Base class for all DeployKit configuration errors."""


class PropertyParseError(DeployKitConfigError, ValueError):
    """A property override string cannot be parsed to the setting's kind.

    Attributes:
        key (str): Property key that carried the value.
        value (str): The raw property value.
        expected (str): Human-readable name of the expected kind.
    """

    def __init__(self, key: str, value: str, expected: str) -> None:
        self.key = key
        self.value = value
        self.expected = expected
        super().__init__(f"Property '{key}': cannot parse {value!r} as {expected}")


class BindingError(DeployKitConfigError, TypeError):
    """A declarative block cannot be bound to its target type.

    Attributes:
        path (str): Dotted path of the offending block or field (e.g. ``kubernetes.access``).
        unknown_fields (tuple[str, ...]): Unknown keys found in the block, sorted.
    """

    def __init__(
        self,
        path: str,
        message: str,
        *,
        unknown_fields: Sequence[str] = (),
    ) -> None:
        self.path = path
        self.unknown_fields = tuple(sorted(unknown_fields))
        super().__init__(f"{path}: {message}")

    @classmethod
    def for_unknown_fields(
        cls,
        path: str,
        unknown: Sequence[str],
        allowed: Sequence[str],
    ) -> BindingError:
        """Build an error enumerating every unknown field of a block.

        Args:
            path (str): Dotted path of the block.
            unknown (Sequence[str]): Keys not declared by the target type.
            allowed (Sequence[str]): Keys accepted by the target type.

        Returns:
            BindingError: The error, with ``unknown_fields`` populated.
        """
        names = ", ".join(sorted(unknown))
        accepted = ", ".join(sorted(allowed))
        return cls(
            path,
            f"unknown field(s): {names} (accepted: {accepted})",
            unknown_fields=unknown,
        )


class ConfigFileError(DeployKitConfigError):
    """A configuration file is unreadable or not valid TOML."""
