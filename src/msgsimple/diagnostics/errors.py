"""msgsimple exception hierarchy.

Three outcomes are kept apart at the API surface:
- caller errors (InvalidArgumentError) are raised before any provider is
  consulted;
- a message that is not found anywhere is not an error at all (lookups
  return the key);
- anything a provider or source raises propagates unchanged, so a broken
  source is never mistaken for a miss.

Python 3.13+. Zero external dependencies.
"""

from .codes import DiagnosticCode


class MsgSimpleError(Exception):
    """Base exception for all msgsimple errors.

    Attributes:
        code: Diagnostic code classifying the error (optional)
    """

    def __init__(self, message: str, *, code: DiagnosticCode | None = None) -> None:
        """Initialize MsgSimpleError.

        Args:
            message: Human-readable error message
            code: Diagnostic code for programmatic inspection
        """
        super().__init__(message)
        self.code = code


class InvalidArgumentError(MsgSimpleError, ValueError):
    """Caller error: null locale, key, provider, source or bad configuration.

    Subclasses ValueError so generic argument validation handlers still
    catch it. The message text comes from the library's own message bundle
    (see msgsimple.messages).
    """

    def __init__(
        self, message: str, *, code: DiagnosticCode = DiagnosticCode.NULL_ARGUMENT
    ) -> None:
        super().__init__(message, code=code)


class MessageFormatError(MsgSimpleError):
    """printf-style rendering failed.

    Raised for missing arguments, arguments of the wrong type for their
    conversion, and malformed directives. Brace-style formatting never
    raises this error: unknown placeholders are left as literal text.

    Attributes:
        pattern: The pattern being rendered
    """

    def __init__(
        self,
        message: str,
        *,
        pattern: str = "",
        code: DiagnosticCode = DiagnosticCode.FORMAT_DIRECTIVE_INVALID,
    ) -> None:
        super().__init__(message, code=code)
        self.pattern = pattern


class SourceLoadError(MsgSimpleError):
    """A file-backed message source could not be read or parsed.

    Attributes:
        path: Path of the file that failed to load
    """

    def __init__(
        self,
        message: str,
        *,
        path: str = "",
        code: DiagnosticCode = DiagnosticCode.SOURCE_READ_FAILED,
    ) -> None:
        super().__init__(message, code=code)
        self.path = path
