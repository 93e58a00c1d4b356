# topmark:header:start
#
#   project      : DeployKit
#   file         : binding.py
#   file_relpath : src/deploykit/config/binding.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Bind declarative blocks (TOML tables) to typed sub-configuration objects.

Each bindable dataclass declares a ``BLOCK_FIELDS`` table mapping the block key
to a `BlockField` (target attribute + converter). Binding:

    - rejects non-table input,
    - collects **all** keys missing from ``BLOCK_FIELDS`` and raises a single
      `BindingError` enumerating them,
    - converts every value, raising `BindingError` with the dotted field path on
      a type mismatch,
    - constructs the dataclass from the converted values (absent keys keep the
      dataclass defaults).

Binding is pure: nothing is shared between calls and the input block is never
mutated.

Collections of blocks come in two shapes, both ordered by declaration:

    - a table of named sub-tables (`bind_block_map`, names are ignored),
    - an array of tables (`bind_block_list`).
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, ClassVar, Protocol, TypeGuard, TypeVar

from deploykit.config.errors import BindingError
from deploykit.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable

    from deploykit.config.logging import DeployKitLogger

logger: DeployKitLogger = get_logger(__name__)


class Bindable(Protocol):
    """Structural type of a dataclass that can be bound from a block."""

    BLOCK_FIELDS: ClassVar[Mapping[str, BlockField]]

    def __init__(self, **kwargs: Any) -> None: ...


B = TypeVar("B", bound=Bindable)


@dataclass(frozen=True)
class BlockField:
    """Binding rule for one block key.

    Attributes:
        attr (str): Dataclass attribute receiving the value.
        convert (Callable[[Any, str], Any]): Converter applied to the raw value.
    """

    attr: str
    convert: Callable[[Any, str], Any]


# ------------------ Guards ------------------


def is_block(obj: object) -> TypeGuard[Mapping[str, Any]]:
    """Return True if ``obj`` is a table-like block."""
    return isinstance(obj, Mapping)


def is_block_list(obj: object) -> TypeGuard[Sequence[Any]]:
    """Return True if ``obj`` is a list of values (not a string)."""
    return isinstance(obj, (list, tuple))


def _mismatch(path: str, expected: str, raw: object) -> BindingError:
    return BindingError(path, f"expected {expected}, got {type(raw).__name__} ({raw!r})")


# ------------------ Converters ------------------


def as_str(raw: Any, path: str) -> str:
    """Accept a string value."""
    if isinstance(raw, str):
        return raw
    raise _mismatch(path, "a string", raw)


def as_bool(raw: Any, path: str) -> bool:
    """Accept a boolean value."""
    if isinstance(raw, bool):
        return raw
    raise _mismatch(path, "a boolean", raw)


def as_int(raw: Any, path: str) -> int:
    """Accept an integer value; booleans are rejected."""
    if isinstance(raw, int) and not isinstance(raw, bool):
        return raw
    raise _mismatch(path, "an integer", raw)


def as_path(raw: Any, path: str) -> Path:
    """Accept a string or `Path` and return a `Path` (not anchored)."""
    if isinstance(raw, Path):
        return raw
    if isinstance(raw, str) and raw.strip():
        return Path(raw)
    raise _mismatch(path, "a path string", raw)


def as_str_list(raw: Any, path: str) -> tuple[str, ...]:
    """Accept a list of strings."""
    if is_block_list(raw):
        return tuple(as_str(item, f"{path}[{i}]") for i, item in enumerate(raw))
    raise _mismatch(path, "a list of strings", raw)


def as_str_map(raw: Any, path: str) -> Mapping[str, str]:
    """Accept a table of scalars; numbers and booleans are coerced to strings."""
    if not is_block(raw):
        raise _mismatch(path, "a table", raw)
    out: dict[str, str] = {}
    for k, v in raw.items():
        if isinstance(v, bool):
            out[k] = str(v).lower()
        elif isinstance(v, (str, int, float)):
            out[k] = str(v)
        else:
            raise _mismatch(f"{path}.{k}", "a scalar", v)
    return out


def as_nested_str_map(raw: Any, path: str) -> Mapping[str, Mapping[str, str]]:
    """Accept a table of tables of scalars (e.g. per-processor options)."""
    if not is_block(raw):
        raise _mismatch(path, "a table", raw)
    return {k: as_str_map(v, f"{path}.{k}") for k, v in raw.items()}


def nested(cls: type[B]) -> Callable[[Any, str], B]:
    """Return a converter binding a nested block to ``cls``."""

    def _convert(raw: Any, path: str) -> B:
        return bind_block(raw, cls, path=path)

    return _convert


def nested_list(cls: type[B]) -> Callable[[Any, str], tuple[B, ...]]:
    """Return a converter binding an array of blocks to a tuple of ``cls``."""

    def _convert(raw: Any, path: str) -> tuple[B, ...]:
        return tuple(bind_block_list(raw, cls, path=path))

    return _convert


# ------------------ Binding ------------------


def bind_block(block: object, cls: type[B], *, path: str | None = None) -> B:
    """Bind one block to an instance of ``cls``.

    Args:
        block (object): The block to bind; must be a table.
        cls (type[B]): Target dataclass declaring ``BLOCK_FIELDS``.
        path (str | None): Dotted location of the block, for error messages.
            Defaults to the class name.

    Returns:
        B: A new instance of ``cls``.

    Raises:
        BindingError: If ``block`` is not a table, holds unknown keys, or a value
            has the wrong type.
    """
    where: str = path or cls.__name__
    if not is_block(block):
        raise _mismatch(where, "a table", block)

    spec: Mapping[str, BlockField] = cls.BLOCK_FIELDS
    unknown: list[str] = [k for k in block if k not in spec]
    if unknown:
        raise BindingError.for_unknown_fields(where, unknown, list(spec))

    kwargs: dict[str, Any] = {}
    for key, raw in block.items():
        rule: BlockField = spec[key]
        kwargs[rule.attr] = rule.convert(raw, f"{where}.{key}")

    logger.debug("Bound %s as %s (%d field(s))", where, cls.__name__, len(kwargs))
    return cls(**kwargs)


def bind_block_map(block: object, cls: type[B], *, path: str | None = None) -> list[B]:
    """Bind a table of named sub-tables, preserving declaration order.

    The sub-table names only identify the entries in the block; they are not
    passed to ``cls``.

    Raises:
        BindingError: If ``block`` is not a table or any child fails to bind.
    """
    where: str = path or cls.__name__
    if not is_block(block):
        raise _mismatch(where, "a table of named blocks", block)
    return [bind_block(child, cls, path=f"{where}.{name}") for name, child in block.items()]


def bind_block_list(blocks: object, cls: type[B], *, path: str | None = None) -> list[B]:
    """Bind every element of an array of tables, preserving order.

    Raises:
        BindingError: If ``blocks`` is not a list or any element fails to bind.
    """
    where: str = path or cls.__name__
    if not is_block_list(blocks):
        raise _mismatch(where, "a list of blocks", blocks)
    return [bind_block(child, cls, path=f"{where}[{i}]") for i, child in enumerate(blocks)]
