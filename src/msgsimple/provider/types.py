"""Provider and loader protocols.

Providers map a locale to the message source to use for it. Loaders are
the building block of LoadingMessageSourceProvider: they produce a source
for a locale on demand.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from msgsimple.locale_utils import Locale
    from msgsimple.source.types import MessageSource

__all__ = ["MessageSourceLoader", "MessageSourceProvider"]


class MessageSourceProvider(Protocol):
    """Protocol for locale to source lookups.

    Returning None means "nothing for this locale" and is not an error:
    MessageBundle moves on to the next provider. Exceptions are treated as
    malfunction and propagate to the caller of the lookup.

    Example:
        >>> class EnglishOnly:
        ...     def __init__(self, source):
        ...         self._source = source
        ...     def get_message_source(self, locale):
        ...         return self._source if locale.language == "en" else None
    """

    def get_message_source(self, locale: Locale) -> MessageSource | None:
        """Get the message source for a locale.

        Args:
            locale: Candidate locale from the fallback sequence

        Returns:
            MessageSource, or None if this provider has none for the locale
        """
        ...


class MessageSourceLoader(Protocol):
    """Protocol for loading a message source for one locale.

    Called from worker threads by LoadingMessageSourceProvider, so
    implementations must be safe to call concurrently for different locales.
    Raising is allowed: the provider logs the failure and falls back to its
    default source.
    """

    def load(self, locale: Locale) -> MessageSource | None:
        """Load the source for a locale.

        Args:
            locale: Locale to load

        Returns:
            MessageSource, or None if nothing exists for the locale
        """
        ...
