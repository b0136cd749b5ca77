"""Mutable builder for MessageBundle.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from msgsimple.diagnostics import InvalidArgumentError
from msgsimple.messages import library_message
from msgsimple.provider.static import StaticMessageSourceProvider
from msgsimple.runtime.bundle import MessageBundle

if TYPE_CHECKING:
    from msgsimple.locale_utils import Locale
    from msgsimple.provider.types import MessageSourceProvider
    from msgsimple.source.types import MessageSource

__all__ = ["MessageBundleBuilder"]

logger = logging.getLogger(__name__)


class MessageBundleBuilder:
    """Assembles the provider chain of a MessageBundle.

    Providers are consulted in list order. Every mutator returns the
    builder for chaining and rejects None.

    Thread Safety:
        Not thread-safe. Build on one thread, then share the frozen bundle.

    Example:
        >>> bundle = (
        ...     MessageBundle.builder()
        ...     .append_source(overrides, locale=FRANCE)
        ...     .append_provider(loading_provider)
        ...     .append_source(defaults)
        ...     .freeze()
        ... )
    """

    __slots__ = ("_providers",)

    def __init__(self, providers: Iterable[MessageSourceProvider] = ()) -> None:
        self._providers: list[MessageSourceProvider] = list(providers)

    @property
    def providers(self) -> tuple[MessageSourceProvider, ...]:
        """Current chain, in lookup order."""
        return tuple(self._providers)

    def append_provider(self, provider: MessageSourceProvider) -> MessageBundleBuilder:
        """Add a provider at the end of the chain (lowest priority)."""
        self._providers.append(_require_provider(provider))
        return self

    def prepend_provider(self, provider: MessageSourceProvider) -> MessageBundleBuilder:
        """Add a provider at the start of the chain (highest priority)."""
        self._providers.insert(0, _require_provider(provider))
        return self

    def append_source(
        self, source: MessageSource, locale: Locale | None = None
    ) -> MessageBundleBuilder:
        """Add a single source at the end of the chain.

        Args:
            source: Message source
            locale: Only serve the source for this exact locale; by default
                it serves every locale

        Raises:
            InvalidArgumentError: If source is None
        """
        self._providers.append(_single_source_provider(source, locale))
        return self

    def prepend_source(
        self, source: MessageSource, locale: Locale | None = None
    ) -> MessageBundleBuilder:
        """Add a single source at the start of the chain.

        See append_source() for the meaning of locale.
        """
        self._providers.insert(0, _single_source_provider(source, locale))
        return self

    def freeze(self) -> MessageBundle:
        """Build an immutable bundle from a snapshot of the chain.

        The builder stays usable; later changes do not affect the bundle.
        """
        bundle = MessageBundle(self._providers)
        logger.info("Froze message bundle with %d provider(s)", len(self._providers))
        return bundle


def _require_provider(provider: MessageSourceProvider) -> MessageSourceProvider:
    if provider is None:
        raise InvalidArgumentError(library_message("cfg.nullProvider"))
    return provider


def _single_source_provider(
    source: MessageSource, locale: Locale | None
) -> StaticMessageSourceProvider:
    if source is None:
        raise InvalidArgumentError(library_message("cfg.nullSource"))
    return StaticMessageSourceProvider.with_single_source(source, locale)
