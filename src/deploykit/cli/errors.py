# topmark:header:start
#
#   project      : DeployKit
#   file         : errors.py
#   file_relpath : src/deploykit/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the DeployKit CLI.

Usage:
    Raise these exceptions in CLI commands to signal errors with standardized
    messages and exit codes. Configuration errors raised by
    [`deploykit.config`][] are converted with `from_config_error`.

Styling:
    Exceptions prefer the project console if available (see `show()`); if no console
    is present in the Click context, they fall back to Click's default styling.
"""

from __future__ import annotations

from typing import IO, TYPE_CHECKING, Any

import click

from deploykit.cli.exit_codes import ExitCode

if TYPE_CHECKING:
    from deploykit.config.errors import DeployKitConfigError


class DeployKitError(click.ClickException):
    """Base class for all DeployKit CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:  # pragma: no cover - trivial
        """Return the plain error message text (colorized later by `show()`)."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Display the error using the project console if available.

        Falls back to Click's default error display when no console is present.
        """
        ctx = click.get_current_context(silent=True)
        console = None
        if ctx is not None and isinstance(getattr(ctx, "obj", None), dict):
            console = ctx.obj.get("console")
        if console is not None:
            console.error(console.styled(f"Error: {self.format_message()}", fg="bright_red"))
            return
        super().show(file)


class DeployKitUsageError(DeployKitError):
    """Error for command-line invocation errors (invalid flags/args)."""

    exit_code = ExitCode.USAGE_ERROR


class DeployKitConfigurationError(DeployKitError):
    """Error for configuration errors (unreadable file, binding or parse failure)."""

    exit_code = ExitCode.CONFIG_ERROR

    @classmethod
    def from_config_error(cls, exc: DeployKitConfigError) -> DeployKitConfigurationError:
        """Wrap a config-layer exception, keeping its message."""
        return cls(str(exc))
