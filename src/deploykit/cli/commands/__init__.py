# topmark:header:start
#
#   project      : DeployKit
#   file         : __init__.py
#   file_relpath : src/deploykit/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""DeployKit CLI subcommands."""
