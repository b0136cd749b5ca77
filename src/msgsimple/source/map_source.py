"""In-memory message source.

MapMessageSource is the simplest MessageSource: an immutable key to pattern
mapping, assembled through a builder or from an existing mapping.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType

from msgsimple.diagnostics import InvalidArgumentError
from msgsimple.messages import library_message
from msgsimple.source.types import MessageKey, Pattern

__all__ = ["MapMessageSource", "MapMessageSourceBuilder"]


class MapMessageSource:
    """Immutable message source backed by a dictionary.

    Safe to share between threads: the mapping is copied at construction
    and never modified.

    Example:
        >>> source = (
        ...     MapMessageSource.builder()
        ...     .put("hello", "Hello {0}")
        ...     .put_all({"bye": "Goodbye"})
        ...     .build()
        ... )
        >>> source.get_key("hello")
        'Hello {0}'
        >>> source.get_key("missing") is None
        True
    """

    __slots__ = ("_messages",)

    def __init__(self, messages: Mapping[MessageKey, Pattern]) -> None:
        """Initialize from a mapping. Prefer builder() or from_mapping().

        Args:
            messages: Key to pattern mapping (copied)
        """
        self._messages: Mapping[MessageKey, Pattern] = MappingProxyType(dict(messages))

    @classmethod
    def builder(cls) -> MapMessageSourceBuilder:
        """Create an empty builder."""
        return MapMessageSourceBuilder()

    @classmethod
    def from_mapping(cls, messages: Mapping[MessageKey, Pattern]) -> MapMessageSource:
        """Create a source from a mapping, validating keys and values.

        Raises:
            InvalidArgumentError: If messages is None or contains None keys or values
        """
        return cls.builder().put_all(messages).build()

    def get_key(self, key: MessageKey) -> Pattern | None:
        """Look up the pattern for a key."""
        return self._messages.get(key)

    def keys(self) -> Iterator[MessageKey]:
        """Iterate over the keys of this source."""
        return iter(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __repr__(self) -> str:
        return f"MapMessageSource(keys={len(self._messages)})"


class MapMessageSourceBuilder:
    """Builder for MapMessageSource.

    Later puts for the same key replace earlier ones. The builder may keep
    being used after build(): built sources are snapshots.
    """

    __slots__ = ("_messages",)

    def __init__(self) -> None:
        self._messages: dict[MessageKey, Pattern] = {}

    def put(self, key: MessageKey, value: Pattern) -> MapMessageSourceBuilder:
        """Add one key/pattern pair.

        Raises:
            InvalidArgumentError: If key or value is None
        """
        if key is None:
            raise InvalidArgumentError(library_message("cfg.nullKey"))
        if value is None:
            raise InvalidArgumentError(library_message("cfg.nullValue"))
        self._messages[key] = value
        return self

    def put_all(self, messages: Mapping[MessageKey, Pattern]) -> MapMessageSourceBuilder:
        """Add every pair of a mapping.

        Validation happens before any pair is added, so a rejected mapping
        leaves the builder unchanged.

        Raises:
            InvalidArgumentError: If messages is None or contains None keys or values
        """
        if messages is None:
            raise InvalidArgumentError(library_message("cfg.nullMap"))
        for key, value in messages.items():
            if key is None:
                raise InvalidArgumentError(library_message("cfg.nullKey"))
            if value is None:
                raise InvalidArgumentError(library_message("cfg.nullValue"))
        self._messages.update(messages)
        return self

    def build(self) -> MapMessageSource:
        """Build an immutable source from the current pairs."""
        return MapMessageSource(self._messages)
