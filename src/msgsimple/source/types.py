"""Message source protocol and type aliases.

A message source maps keys to patterns. It is the leaf capability of a
message bundle: providers hand out sources per locale, and the bundle
queries them for keys.

Python 3.13+. Zero external dependencies.
"""

from typing import Protocol, TypeAlias

__all__ = [
    "MessageKey",
    "MessageSource",
    "Pattern",
]

MessageKey: TypeAlias = str
"""Identifier of a message inside a source (e.g., 'query.nullKey')."""

Pattern: TypeAlias = str
"""Unformatted message template associated with a key (e.g., 'Hello {0}')."""


class MessageSource(Protocol):
    """Protocol for key to pattern lookups.

    This is a Protocol (structural typing) rather than ABC: any object with
    a matching get_key() method is a message source, whether it is backed by
    a dict, a properties file or a gettext catalog.

    Contract:
        - Return the pattern when the key is present. An empty string is a
          present, empty pattern.
        - Return None when the key is absent. Absence is never signaled by
          raising.
        - Raise only to signal malfunction. MessageBundle does not catch
          these errors; they reach the caller of the lookup.

    Example:
        >>> class UpperSource:
        ...     def get_key(self, key: str) -> str | None:
        ...         return key.upper() if key.startswith("shout.") else None
    """

    def get_key(self, key: MessageKey) -> Pattern | None:
        """Look up the pattern for a key.

        Args:
            key: Message key

        Returns:
            Pattern, or None if this source has no such key
        """
        ...
