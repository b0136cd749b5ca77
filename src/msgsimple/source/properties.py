"""Properties-file message sources.

Parses the classic ``key = value`` properties format and exposes it as
message sources:
    parse_properties - Text to dict parser
    PropertiesMessageSource - Static source read once from a file or text
    ReloadingMessageSource - File-backed source re-read after an expiry

Format rules:
    - Lines starting (after whitespace) with '#' or '!' are comments
    - Key and value are separated by '=', ':' or whitespace
    - A line ending with an odd number of backslashes continues on the next
      line; leading whitespace of the continuation is dropped
    - Escapes: \\t \\n \\r \\f \\uXXXX; any other escaped character stands
      for itself (so '\\=' and '\\ ' put separators into keys)
    - Later duplicates replace earlier ones

Python 3.13+.
"""

from __future__ import annotations

import logging
import re
import time
from collections.abc import Callable, Iterator, Mapping
from pathlib import Path
from types import MappingProxyType

from msgsimple.constants import DEFAULT_ENCODING, DEFAULT_EXPIRY
from msgsimple.core.rwlock import RWLock
from msgsimple.diagnostics import (
    DiagnosticCode,
    InvalidArgumentError,
    SourceLoadError,
)
from msgsimple.messages import library_message
from msgsimple.source.types import MessageKey, Pattern

__all__ = [
    "PropertiesMessageSource",
    "ReloadingMessageSource",
    "parse_properties",
]

logger = logging.getLogger(__name__)

_WHITESPACE = " \t\f"
_SEPARATORS = "=:"
_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_ESCAPE = re.compile(r"\\(u[0-9a-fA-F]{4}|.)", re.DOTALL)
_SIMPLE_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}


def _continues(line: str) -> bool:
    """Check if a line ends with an odd number of backslashes."""
    trailing = len(line) - len(line.rstrip("\\"))
    return trailing % 2 == 1


def _logical_lines(text: str) -> Iterator[str]:
    """Join continued lines and drop blank and comment lines."""
    pending: str | None = None
    for natural in _LINE_BREAK.split(text):
        line = natural.lstrip(_WHITESPACE)
        if pending is None and (not line or line[0] in "#!"):
            continue
        if _continues(line):
            pending = (pending or "") + line[:-1]
            continue
        yield (pending or "") + line
        pending = None
    if pending is not None:
        yield pending


def _unescape(text: str) -> str:
    def replace(match: re.Match[str]) -> str:
        escaped = match.group(1)
        if escaped[0] == "u" and len(escaped) == 5:
            return chr(int(escaped[1:], 16))
        if escaped == "u":
            msg = "Malformed \\uXXXX escape"
            raise ValueError(msg)
        return _SIMPLE_ESCAPES.get(escaped, escaped)

    result = _ESCAPE.sub(replace, text)
    # \uXXXX pairs may encode a surrogate pair; join them into one code point
    if any(0xD800 <= ord(char) <= 0xDFFF for char in result):
        result = result.encode("utf-16", "surrogatepass").decode("utf-16")
    return result


def _split_entry(line: str) -> tuple[str, str]:
    """Split a logical line into unescaped key and value."""
    end = 0
    length = len(line)
    while end < length:
        char = line[end]
        if char == "\\":
            end += 2
            continue
        if char in _SEPARATORS or char in _WHITESPACE:
            break
        end += 1
    end = min(end, length)

    rest = line[end:].lstrip(_WHITESPACE)
    if rest and rest[0] in _SEPARATORS:
        rest = rest[1:].lstrip(_WHITESPACE)
    return _unescape(line[:end]), _unescape(rest)


def parse_properties(text: str) -> dict[MessageKey, Pattern]:
    """Parse properties text into a key to value dictionary.

    Args:
        text: Properties file content

    Returns:
        Dictionary of entries, later duplicates winning

    Raises:
        ValueError: If a \\uXXXX escape is malformed

    Example:
        >>> parse_properties("greeting = Hello {0}\\n# comment\\nbye: Goodbye")
        {'greeting': 'Hello {0}', 'bye': 'Goodbye'}
    """
    return dict(_split_entry(line) for line in _logical_lines(text))


def _read_properties(path: Path, encoding: str) -> dict[MessageKey, Pattern]:
    """Read and parse a properties file.

    Raises:
        SourceLoadError: If the file cannot be read, decoded or parsed
    """
    try:
        text = path.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError, LookupError) as e:
        raise SourceLoadError(
            library_message("source.readFailed", str(path), e), path=str(path)
        ) from e
    try:
        return parse_properties(text)
    except ValueError as e:
        raise SourceLoadError(
            library_message("source.readFailed", str(path), e),
            path=str(path),
            code=DiagnosticCode.SOURCE_PARSE_FAILED,
        ) from e


def _require_path(path: str | Path) -> Path:
    if path is None:
        raise InvalidArgumentError(library_message("cfg.nullPath"))
    return Path(path)


class PropertiesMessageSource:
    """Static message source loaded once from properties text.

    Example:
        >>> source = PropertiesMessageSource.from_text("hello = Hello {0}")
        >>> source.get_key("hello")
        'Hello {0}'
    """

    __slots__ = ("_messages", "path")

    def __init__(self, messages: Mapping[MessageKey, Pattern], path: str | None = None) -> None:
        """Initialize from parsed entries. Prefer from_path() or from_text().

        Args:
            messages: Parsed key to pattern mapping (copied)
            path: File the entries came from, for diagnostics
        """
        self._messages: Mapping[MessageKey, Pattern] = MappingProxyType(dict(messages))
        self.path = path

    @classmethod
    def from_text(cls, text: str) -> PropertiesMessageSource:
        """Parse a source from properties text.

        Raises:
            SourceLoadError: If the text contains a malformed escape
        """
        try:
            return cls(parse_properties(text))
        except ValueError as e:
            raise SourceLoadError(str(e), code=DiagnosticCode.SOURCE_PARSE_FAILED) from e

    @classmethod
    def from_path(
        cls, path: str | Path, encoding: str = DEFAULT_ENCODING
    ) -> PropertiesMessageSource:
        """Read a source from a properties file.

        Args:
            path: File path
            encoding: Text encoding of the file

        Raises:
            InvalidArgumentError: If path is None
            SourceLoadError: If the file cannot be read or parsed
        """
        file_path = _require_path(path)
        return cls(_read_properties(file_path, encoding), path=str(file_path))

    def get_key(self, key: MessageKey) -> Pattern | None:
        """Look up the pattern for a key."""
        return self._messages.get(key)

    def __len__(self) -> int:
        return len(self._messages)

    def __repr__(self) -> str:
        return f"PropertiesMessageSource(path={self.path!r}, keys={len(self._messages)})"


class ReloadingMessageSource:
    """Properties-file source re-read once its content has expired.

    The file is read at construction; a failure there raises. Afterwards,
    the first lookup after ``expiry`` seconds re-reads the file. Only one
    thread reloads while concurrent lookups wait on the readers-writer lock.
    A failed reload is logged and the previous entries stay in use until
    the next expiry.

    Thread Safety:
        Thread-safe. Lookups take the read lock, reloads the write lock.

    Example:
        >>> source = ReloadingMessageSource("i18n/messages.properties", expiry=30.0)
        >>> source.get_key("greeting")
        'Hello {0}'
    """

    __slots__ = ("_clock", "_encoding", "_expiry", "_loaded_at", "_lock", "_messages", "path")

    def __init__(
        self,
        path: str | Path,
        *,
        encoding: str = DEFAULT_ENCODING,
        expiry: float = DEFAULT_EXPIRY,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize and perform the first load.

        Args:
            path: Properties file path
            encoding: Text encoding of the file
            expiry: Seconds after which the entries are re-read
            clock: Monotonic time source (injectable for tests)

        Raises:
            InvalidArgumentError: If path is None or expiry is not positive
            SourceLoadError: If the initial load fails
        """
        file_path = _require_path(path)
        if expiry <= 0:
            raise InvalidArgumentError(
                library_message("cfg.nonPositiveDuration", expiry),
                code=DiagnosticCode.INVALID_CONFIGURATION,
            )
        self.path = str(file_path)
        self._encoding = encoding
        self._expiry = expiry
        self._clock = clock
        self._lock = RWLock()
        self._messages: Mapping[MessageKey, Pattern] = MappingProxyType(
            _read_properties(file_path, encoding)
        )
        self._loaded_at = clock()

    @property
    def expiry(self) -> float:
        """Seconds between reloads."""
        return self._expiry

    def _is_stale(self) -> bool:
        return self._clock() - self._loaded_at >= self._expiry

    def _reload(self) -> None:
        with self._lock.write():
            # Another thread may have reloaded while we waited for the lock
            if not self._is_stale():
                return
            try:
                entries = _read_properties(Path(self.path), self._encoding)
            except SourceLoadError as e:
                logger.error("Reload of %s failed, keeping previous entries: %s", self.path, e)
            else:
                self._messages = MappingProxyType(entries)
                logger.debug("Reloaded %d entries from %s", len(entries), self.path)
            self._loaded_at = self._clock()

    def get_key(self, key: MessageKey) -> Pattern | None:
        """Look up the pattern for a key, reloading first if expired."""
        with self._lock.read():
            stale = self._is_stale()
        if stale:
            self._reload()
        with self._lock.read():
            return self._messages.get(key)

    def __repr__(self) -> str:
        return f"ReloadingMessageSource(path={self.path!r}, expiry={self._expiry})"
