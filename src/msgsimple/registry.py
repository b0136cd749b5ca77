"""Process-wide registry of message bundles.

Libraries built on msgsimple ship their messages as a bundle provider
class. get_bundle() instantiates each class once and caches the bundle it
returns, so every module of the library shares one frozen bundle.

Python 3.13+.
"""

from __future__ import annotations

import logging
from threading import RLock
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from msgsimple.runtime.bundle import MessageBundle

__all__ = ["MessageBundleProvider", "clear_registry", "get_bundle", "registered_providers"]

logger = logging.getLogger(__name__)


class MessageBundleProvider(Protocol):
    """Protocol for classes that assemble a library's message bundle.

    The class must be constructible without arguments.

    Example:
        >>> class MyMessages:
        ...     def get_bundle(self) -> MessageBundle:
        ...         source = MapMessageSource.from_mapping({"greeting": "Hello {0}"})
        ...         return MessageBundle.builder().append_source(source).freeze()
        >>> get_bundle(MyMessages).get_message(Locale.ROOT, "greeting", "you")
        'Hello you'
    """

    def get_bundle(self) -> MessageBundle:
        """Build the bundle. Called at most once per registry lifetime."""
        ...


# RLock: a provider may itself look up other registered bundles while
# building its own.
_lock = RLock()
_bundles: dict[type[MessageBundleProvider], MessageBundle] = {}


def get_bundle(provider_cls: type[MessageBundleProvider]) -> MessageBundle:
    """Get the bundle of a provider class, building it on first use.

    Thread-safe: concurrent first calls build the bundle exactly once.

    Args:
        provider_cls: Bundle provider class

    Returns:
        The cached MessageBundle for provider_cls
    """
    with _lock:
        bundle = _bundles.get(provider_cls)
        if bundle is None:
            bundle = provider_cls().get_bundle()
            _bundles[provider_cls] = bundle
            logger.debug("Registered message bundle from %s", provider_cls.__qualname__)
        return bundle


def registered_providers() -> tuple[type[MessageBundleProvider], ...]:
    """Get provider classes whose bundles are currently cached."""
    with _lock:
        return tuple(_bundles)


def clear_registry() -> None:
    """Drop all cached bundles. Intended for tests."""
    with _lock:
        _bundles.clear()
