"""Static message source provider.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING

from msgsimple.diagnostics import InvalidArgumentError
from msgsimple.messages import library_message

if TYPE_CHECKING:
    from msgsimple.locale_utils import Locale
    from msgsimple.source.types import MessageSource

__all__ = ["StaticMessageSourceProvider", "StaticMessageSourceProviderBuilder"]


class StaticMessageSourceProvider:
    """Provider backed by a fixed locale to source mapping.

    Locales with no entry get the default source, which may be absent.
    Lookups match locales exactly: fallback to less specific locales is the
    bundle's job, not the provider's.

    Example:
        >>> provider = (
        ...     StaticMessageSourceProvider.builder()
        ...     .add_source(FRANCE, french)
        ...     .set_default_source(english)
        ...     .freeze()
        ... )
        >>> provider.get_message_source(FRANCE) is french
        True
        >>> provider.get_message_source(GERMANY) is english
        True
    """

    __slots__ = ("_default_source", "_sources")

    def __init__(
        self,
        sources: Mapping[Locale, MessageSource] | None = None,
        default_source: MessageSource | None = None,
    ) -> None:
        self._sources: Mapping[Locale, MessageSource] = MappingProxyType(dict(sources or {}))
        self._default_source = default_source

    @classmethod
    def builder(cls) -> StaticMessageSourceProviderBuilder:
        """Create an empty builder."""
        return StaticMessageSourceProviderBuilder()

    @classmethod
    def with_single_source(
        cls, source: MessageSource, locale: Locale | None = None
    ) -> StaticMessageSourceProvider:
        """Create a provider serving one source.

        Args:
            source: Message source
            locale: Serve the source only for this exact locale; by default
                the source is served for every locale

        Raises:
            InvalidArgumentError: If source is None
        """
        builder = cls.builder()
        if locale is None:
            builder.set_default_source(source)
        else:
            builder.add_source(locale, source)
        return builder.freeze()

    @property
    def default_source(self) -> MessageSource | None:
        """Source returned for locales with no dedicated entry."""
        return self._default_source

    @property
    def locales(self) -> frozenset[Locale]:
        """Locales with a dedicated source."""
        return frozenset(self._sources)

    def get_message_source(self, locale: Locale) -> MessageSource | None:
        """Get the source for exactly this locale, else the default source."""
        return self._sources.get(locale, self._default_source)

    def thaw(self) -> StaticMessageSourceProviderBuilder:
        """Create a builder pre-filled with this provider's content."""
        builder = StaticMessageSourceProviderBuilder()
        builder._sources.update(self._sources)
        builder._default_source = self._default_source
        return builder

    def __repr__(self) -> str:
        return (
            f"StaticMessageSourceProvider(locales={sorted(map(str, self._sources))}, "
            f"default={self._default_source is not None})"
        )


class StaticMessageSourceProviderBuilder:
    """Builder for StaticMessageSourceProvider. Not thread-safe."""

    __slots__ = ("_default_source", "_sources")

    def __init__(self) -> None:
        self._sources: dict[Locale, MessageSource] = {}
        self._default_source: MessageSource | None = None

    def set_default_source(self, source: MessageSource) -> StaticMessageSourceProviderBuilder:
        """Set the source for locales with no dedicated entry.

        Raises:
            InvalidArgumentError: If source is None
        """
        if source is None:
            raise InvalidArgumentError(library_message("cfg.nullSource"))
        self._default_source = source
        return self

    def add_source(
        self, locale: Locale, source: MessageSource
    ) -> StaticMessageSourceProviderBuilder:
        """Set the source for one locale, replacing any previous one.

        Raises:
            InvalidArgumentError: If locale or source is None
        """
        if locale is None:
            raise InvalidArgumentError(library_message("cfg.nullLocale"))
        if source is None:
            raise InvalidArgumentError(library_message("cfg.nullSource"))
        self._sources[locale] = source
        return self

    def freeze(self) -> StaticMessageSourceProvider:
        """Build an immutable provider from the current content."""
        return StaticMessageSourceProvider(self._sources, self._default_source)
