"""MessageBundle - Main API for message lookup and formatting.

Python 3.13+. External dependency: Babel (CLDR locale data).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, TypeVar

from msgsimple.diagnostics import DiagnosticCode, InvalidArgumentError
from msgsimple.locale_utils import get_applicable, get_system_locale
from msgsimple.messages import library_message
from msgsimple.runtime.formatter import format_message
from msgsimple.runtime.printf import format_printf

if TYPE_CHECKING:
    from msgsimple.locale_utils import Locale
    from msgsimple.provider.types import MessageSourceProvider
    from msgsimple.runtime.builder import MessageBundleBuilder
    from msgsimple.source.types import MessageKey, Pattern

__all__ = ["MessageBundle"]

logger = logging.getLogger(__name__)

T = TypeVar("T")


class MessageBundle:
    """Immutable chain of message source providers.

    A lookup walks the fallback sequence of the requested locale (most
    specific first, root last). For each candidate locale it asks every
    provider, in chain order, for a source, and asks that source for the
    key. The first pattern found ends the search. When nothing matches,
    the key itself is returned.

    Not-found is not an error. Anything a provider or source raises
    propagates to the caller unchanged.

    Thread Safety:
        Immutable after freeze(). Safe to share between threads, provided
        the providers themselves are.

    Examples:
        >>> source = MapMessageSource.from_mapping({"greeting": "Hello {0}"})
        >>> bundle = MessageBundle.builder().append_source(source).freeze()
        >>> bundle.get_message(FRANCE, "greeting", "World")
        'Hello World'
        >>> bundle.get_message(FRANCE, "farewell")
        'farewell'
        >>> bundle.printf(US, "greeting")
        'Hello {0}'
    """

    __slots__ = ("_providers",)

    def __init__(self, providers: Iterable[MessageSourceProvider] = ()) -> None:
        """Initialize from a provider sequence. Prefer builder().freeze().

        Args:
            providers: Providers in lookup order (copied)
        """
        self._providers: tuple[MessageSourceProvider, ...] = tuple(providers)

    @classmethod
    def builder(cls) -> MessageBundleBuilder:
        """Create an empty builder."""
        # Lazy import: the builder module imports MessageBundle
        from msgsimple.runtime.builder import MessageBundleBuilder  # noqa: PLC0415

        return MessageBundleBuilder()

    def thaw(self) -> MessageBundleBuilder:
        """Create a builder pre-filled with this bundle's providers.

        The builder works on a copy: changing it never affects this bundle.
        """
        from msgsimple.runtime.builder import MessageBundleBuilder  # noqa: PLC0415

        return MessageBundleBuilder(self._providers)

    @property
    def providers(self) -> tuple[MessageSourceProvider, ...]:
        """Providers in lookup order."""
        return self._providers

    def resolve_pattern(self, locale: Locale, key: MessageKey) -> Pattern | None:
        """Find the raw pattern for a key.

        Args:
            locale: Requested locale
            key: Message key

        Returns:
            The first pattern found, or None if no source has the key

        Raises:
            InvalidArgumentError: If locale or key is None (no provider is
                consulted)
        """
        if locale is None:
            raise InvalidArgumentError(library_message("query.nullLocale"))
        if key is None:
            raise InvalidArgumentError(library_message("query.nullKey"))

        for candidate in get_applicable(locale):
            for provider in self._providers:
                source = provider.get_message_source(candidate)
                if source is None:
                    continue
                pattern = source.get_key(key)
                if pattern is not None:
                    logger.debug("Resolved '%s' for locale '%s' as '%s'", key, locale, candidate)
                    return pattern

        logger.debug("Key '%s' not found for locale '%s'", key, locale)
        return None

    def get_message(self, locale: Locale, key: MessageKey, *args: object) -> str:
        """Look up a message, brace-formatting it when arguments are given.

        Without arguments the pattern is returned verbatim. With at least
        one argument (even a single None) it is formatted with
        format_message(). A missing key is returned as is, unformatted.

        Raises:
            InvalidArgumentError: If locale or key is None

        Example:
            >>> bundle.get_message(FRANCE, "greeting", None)
            'Hello null'
        """
        pattern = self.resolve_pattern(locale, key)
        if pattern is None:
            return key
        if not args:
            return pattern
        return format_message(pattern, locale, args)

    def printf(self, locale: Locale, key: MessageKey, *args: object) -> str:
        """Look up a message and render it printf-style.

        Found patterns always go through format_printf(), so '%%' becomes
        '%' even without arguments. A missing key is returned as is.

        Raises:
            InvalidArgumentError: If locale or key is None
            MessageFormatError: If the pattern and the arguments do not match
        """
        pattern = self.resolve_pattern(locale, key)
        if pattern is None:
            return key
        return format_printf(pattern, locale, args)

    # ------------------------------------------------------------------
    # Preconditions
    # ------------------------------------------------------------------

    def check_not_null(
        self, reference: T | None, key: MessageKey, *, locale: Locale | None = None
    ) -> T:
        """Return reference, or raise with the message of key if it is None.

        Args:
            reference: Value to check
            key: Message key of the error text
            locale: Locale of the error text (default: system locale)

        Raises:
            InvalidArgumentError: If reference is None

        Example:
            >>> name = bundle.check_not_null(user.name, "user.nullName")
        """
        if reference is None:
            message = self.get_message(_or_system(locale), key)
            raise InvalidArgumentError(message, code=DiagnosticCode.PRECONDITION_FAILED)
        return reference

    def check_not_null_printf(
        self, reference: T | None, key: MessageKey, *args: object, locale: Locale | None = None
    ) -> T:
        """Like check_not_null(), with a printf-style message."""
        if reference is None:
            message = self.printf(_or_system(locale), key, *args)
            raise InvalidArgumentError(message, code=DiagnosticCode.PRECONDITION_FAILED)
        return reference

    def check_argument(
        self, condition: object, key: MessageKey, *, locale: Locale | None = None
    ) -> None:
        """Raise with the message of key if condition is falsy.

        Raises:
            InvalidArgumentError: If condition is falsy
        """
        if not condition:
            message = self.get_message(_or_system(locale), key)
            raise InvalidArgumentError(message, code=DiagnosticCode.PRECONDITION_FAILED)

    def check_argument_printf(
        self, condition: object, key: MessageKey, *args: object, locale: Locale | None = None
    ) -> None:
        """Like check_argument(), with a printf-style message."""
        if not condition:
            message = self.printf(_or_system(locale), key, *args)
            raise InvalidArgumentError(message, code=DiagnosticCode.PRECONDITION_FAILED)

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return f"MessageBundle(providers={len(self._providers)})"


def _or_system(locale: Locale | None) -> Locale:
    return get_system_locale() if locale is None else locale
