# topmark:header:start
#
#   project      : KeyVal Resource
#   file         : exit_codes.py
#   file_relpath : src/keyval/core/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exit codes for the KeyVal resource.

KeyVal aligns with the BSD `sysexits` convention so that operators reading a
failed Concourse step can tell a malformed request from a faulty mapping or a
filesystem problem. Concourse itself only distinguishes zero from non-zero.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for KeyVal.

    Attributes:
        SUCCESS: Successful execution with no errors.
        FAILURE: Generic failure (non-specific error). Prefer a more specific
            code if available.
        USAGE_ERROR: Invalid invocation or malformed request on stdin. Mirrors
            BSD ``EX_USAGE (64)``.
        DATA_ERROR: A mapping evaluated to an invalid result (wrong shape,
            non-string values, unencodable file content). Mirrors BSD
            ``EX_DATAERR (65)``.
        IO_ERROR: Error writing an output file. Mirrors BSD ``EX_IOERR (74)``.
        CONFIG_ERROR: Invalid mapping expression or file configuration.
            Mirrors BSD ``EX_CONFIG (78)``.
        UNEXPECTED_ERROR: Unhandled/unknown error (last-resort).
    """

    SUCCESS = 0
    FAILURE = 1

    # sysexits-aligned values
    USAGE_ERROR = 64  # EX_USAGE
    DATA_ERROR = 65  # EX_DATAERR
    IO_ERROR = 74  # EX_IOERR
    CONFIG_ERROR = 78  # EX_CONFIG

    UNEXPECTED_ERROR = 255
