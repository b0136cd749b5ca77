"""Error types and diagnostic codes for msgsimple.

Python 3.13+. Zero external dependencies.
"""

from .codes import DiagnosticCode
from .errors import InvalidArgumentError, MessageFormatError, MsgSimpleError, SourceLoadError

__all__ = [
    "DiagnosticCode",
    "InvalidArgumentError",
    "MessageFormatError",
    "MsgSimpleError",
    "SourceLoadError",
]
