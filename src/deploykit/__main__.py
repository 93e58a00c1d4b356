# topmark:header:start
#
#   project      : DeployKit
#   file         : __main__.py
#   file_relpath : src/deploykit/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running DeployKit via ``python -m deploykit``.

Delegates to :func:`deploykit.cli.main.cli`, the single authoritative CLI
entry point.

Examples:
    Show the effective settings of the project in the current directory::

        python -m deploykit settings -D deploykit.namespace=dev
"""

from __future__ import annotations

from deploykit.cli.main import cli

if __name__ == "__main__":
    cli()
