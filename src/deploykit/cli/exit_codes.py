# topmark:header:start
#
#   project      : DeployKit
#   file         : exit_codes.py
#   file_relpath : src/deploykit/cli/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Defines standardized exit codes used by the DeployKit CLI application.

Codes above ``FAILURE`` follow the BSD ``sysexits.h`` conventions so wrapper
scripts can tell a bad invocation from a bad configuration.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for the DeployKit CLI.

    Attributes:
        SUCCESS (int): The command completed.
        FAILURE (int): Unspecified failure.
        USAGE_ERROR (int): Invalid flags or arguments (e.g. a malformed ``-D`` definition).
        CONFIG_ERROR (int): The configuration could not be loaded, bound or resolved.
    """

    SUCCESS = 0
    FAILURE = 1
    USAGE_ERROR = 64
    CONFIG_ERROR = 78
