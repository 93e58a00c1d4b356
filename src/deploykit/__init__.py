# topmark:header:start
#
#   project      : DeployKit
#   file         : __init__.py
#   file_relpath : src/deploykit/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""DeployKit package.

DeployKit is the configuration surface of a container build and Kubernetes
deployment extension. It resolves every setting from project properties, the
declarative ``[kubernetes]`` block and built-in defaults, and exposes both a
CLI and a small typed API for orchestration code.
"""

from __future__ import annotations
