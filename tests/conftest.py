# topmark:header:start
#
#   project      : DeployKit
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the DeployKit test suite.

This file sets up global fixtures and customizes the logging configuration for test runs,
and provides small builders for project contexts and extensions.

Notes:
    Tests construct `ProjectContext` instances directly; nothing here touches
    the real filesystem outside ``tmp_path``.
"""

from __future__ import annotations

import textwrap
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar, cast

import pytest

from deploykit.config import KubernetesExtension, ProjectContext, PropertySource, logging

F = TypeVar("F", bound=Callable[..., object])

# This defines the type for the decorator function itself:
# It takes a Callable (F) and returns the same Callable (F).
DecoratorType = Callable[[F], F]


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type.

    Args:
        mark (Any): A pytest mark decorator such as `pytest.mark.cli`.

    Returns:
        DecoratorType[Any]: A decorator that preserves the wrapped function's type.
    """

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


mark_cli: DecoratorType[Any] = as_typed_mark(pytest.mark.cli)
mark_config: DecoratorType[Any] = as_typed_mark(pytest.mark.config)


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`.

    Args:
        *args (Any): Positional arguments forwarded to `pytest.mark.parametrize`.
        **kwargs (Any): Keyword arguments forwarded to `pytest.mark.parametrize`.

    Returns:
        Callable[[F], F]: A decorator that preserves the wrapped function's type.
    """
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


def hookimpl(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.hookimpl`."""
    return as_typed_mark(pytest.hookimpl(*args, **kwargs))


def fixture(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.fixture`."""
    return as_typed_mark(pytest.fixture(*args, **kwargs))


@pytest.fixture(autouse=True)
def silence_deploykit_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure DeployKit's runtime log level is not forced via env during tests.

    Args:
        monkeypatch (pytest.MonkeyPatch): Pytest monkeypatch fixture used to manipulate
            environment variables.
    """
    monkeypatch.delenv(logging.LOG_LEVEL_ENV_VAR, raising=False)


@hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Set the logging level to TRACE so resolver tiers show up in failure reports.

    Args:
        config (pytest.Config): The pytest configuration object.
    """
    logging.setup_logging(level=logging.TRACE_LEVEL)


BASE_DIR: Path = Path("/work/app")


def make_project(
    properties: dict[str, str] | None = None,
    *,
    base: Path = BASE_DIR,
) -> ProjectContext:
    """Return a project context rooted at ``base`` with conventional directories.

    Args:
        properties (dict[str, str] | None): Project properties.
        base (Path): Absolute base directory (never created on disk).

    Returns:
        ProjectContext: The context.
    """
    return ProjectContext.from_base(base, PropertySource(properties or {}))


def make_extension(
    properties: dict[str, str] | None = None,
    **declared: Any,
) -> KubernetesExtension:
    """Return an extension over `make_project` with settings already declared.

    Args:
        properties (dict[str, str] | None): Project properties.
        **declared (Any): Settings declared as if written in the ``[kubernetes]`` block.

    Returns:
        KubernetesExtension: The extension.
    """
    ext = KubernetesExtension(make_project(properties))
    for name, value in declared.items():
        ext.declare(name, value)
    return ext


def write_text(path: Path, text: str) -> Path:
    """Write dedented ``text`` to ``path`` (creating parents) and return the path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(text).lstrip("\n"), encoding="utf-8")
    return path
