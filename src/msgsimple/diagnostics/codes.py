"""Diagnostic codes for msgsimple errors.

Every library exception carries one of these codes so callers and log
aggregation can tell error classes apart without parsing message text.

Python 3.13+. Zero external dependencies.
"""

from enum import Enum

__all__ = ["DiagnosticCode"]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Caller errors (null or invalid arguments, configuration)
        2000-2999: Formatting errors (printf rendering)
        3000-3999: Source errors (file-backed sources that cannot be read)
    """

    # Caller errors (1000-1999)
    NULL_ARGUMENT = 1001
    INVALID_CONFIGURATION = 1002
    PRECONDITION_FAILED = 1003
    UNSAFE_LOCALE_PATH = 1004

    # Formatting errors (2000-2999)
    FORMAT_ARGUMENT_MISSING = 2001
    FORMAT_TYPE_MISMATCH = 2002
    FORMAT_DIRECTIVE_INVALID = 2003

    # Source errors (3000-3999)
    SOURCE_READ_FAILED = 3001
    SOURCE_PARSE_FAILED = 3002
