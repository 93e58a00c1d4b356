# topmark:header:start
#
#   project      : DeployKit
#   file         : constants.py
#   file_relpath : src/deploykit/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""DeployKit Constants."""

from __future__ import annotations

from importlib.metadata import version as get_version

DEPLOYKIT_VERSION: str = get_version("deploykit")

TOML_BLOCK_START: str = "# === BEGIN[TOML] ==="
TOML_BLOCK_END: str = "# === END[TOML] ==="

VALUE_NOT_SET: str = "<not set>"
