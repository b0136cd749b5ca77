"""Lazily loading message source provider.

Loads one message source per locale on demand, on a thread pool, with a
bounded wait and an expiry. A lookup never fails because of loading: a
loader that raises, times out or finds nothing yields the default source.

Python 3.13+.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Self

from msgsimple.diagnostics import DiagnosticCode, InvalidArgumentError
from msgsimple.messages import library_message
from msgsimple.provider.config import LoadingConfig, require_positive_duration

if TYPE_CHECKING:
    from types import TracebackType

    from msgsimple.locale_utils import Locale
    from msgsimple.provider.types import MessageSourceLoader
    from msgsimple.source.types import MessageSource

__all__ = ["LoadingMessageSourceProvider", "LoadingMessageSourceProviderBuilder"]

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _LoadEntry:
    """One (possibly in-flight) load. completed_at is set by the worker."""

    future: Future[MessageSource | None] = field(default_factory=Future)
    completed_at: float | None = None


class LoadingMessageSourceProvider:
    """Provider that loads sources per locale with a MessageSourceLoader.

    The first lookup for a locale schedules a load on the worker pool and
    waits up to ``config.timeout`` seconds. Concurrent lookups for the same
    locale share the same in-flight load. A slow load keeps running after
    the wait gives up, and later lookups pick up its result.

    A completed load is kept until ``config.expiry`` seconds after it
    finished; the next lookup after that schedules a new load. Failed loads
    are kept just as long, so a broken loader is not retried on every
    lookup.

    Thread Safety:
        Thread-safe. The loader is called from worker threads.

    Example:
        >>> with (
        ...     LoadingMessageSourceProvider.builder()
        ...     .set_loader(PropertiesLoader("i18n", "messages"))
        ...     .set_default_source(fallback)
        ...     .set_load_timeout(0.5)
        ...     .build()
        ... ) as provider:
        ...     bundle = MessageBundle.builder().append_provider(provider).freeze()
        ...     bundle.get_message(FRANCE, "greeting")
        'Bonjour'
    """

    __slots__ = (
        "_clock",
        "_config",
        "_default_source",
        "_entries",
        "_executor",
        "_loader",
        "_lock",
    )

    def __init__(
        self,
        loader: MessageSourceLoader,
        *,
        default_source: MessageSource | None = None,
        config: LoadingConfig | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the provider and its worker pool.

        Args:
            loader: Loads a source for one locale
            default_source: Returned when a load fails, times out or finds
                nothing
            config: Timing configuration (default: LoadingConfig())
            clock: Monotonic time source (injectable for tests)

        Raises:
            InvalidArgumentError: If loader is None
        """
        if loader is None:
            raise InvalidArgumentError(library_message("cfg.nullLoader"))
        self._loader = loader
        self._default_source = default_source
        self._config = config if config is not None else LoadingConfig()
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: dict[Locale, _LoadEntry] = {}
        self._executor = ThreadPoolExecutor(
            max_workers=self._config.max_workers, thread_name_prefix="msgsimple-loader"
        )

    @classmethod
    def builder(cls) -> LoadingMessageSourceProviderBuilder:
        """Create a builder with the default configuration."""
        return LoadingMessageSourceProviderBuilder()

    @property
    def config(self) -> LoadingConfig:
        """Timing configuration."""
        return self._config

    @property
    def default_source(self) -> MessageSource | None:
        """Source used when loading yields nothing."""
        return self._default_source

    def get_message_source(self, locale: Locale) -> MessageSource | None:
        """Get the loaded source for a locale, or the default source.

        Raises:
            RuntimeError: If the provider has been closed and a new load is
                needed
        """
        entry = self._entry_for(locale)
        try:
            source = entry.future.result(timeout=self._config.timeout)
        except TimeoutError:
            logger.warning(
                "Loading messages for locale '%s' timed out after %ss, using default source",
                locale,
                self._config.timeout,
            )
            return self._default_source
        except Exception:  # noqa: BLE001 - the worker already logged the failure
            return self._default_source
        if source is None:
            logger.debug("No messages for locale '%s', using default source", locale)
            return self._default_source
        return source

    def _entry_for(self, locale: Locale) -> _LoadEntry:
        with self._lock:
            entry = self._entries.get(locale)
            if entry is None or self._is_expired(entry):
                entry = _LoadEntry()
                # Raises RuntimeError once closed; nothing is cached then
                self._executor.submit(self._load, locale, entry)
                self._entries[locale] = entry
                logger.debug("Scheduled message load for locale '%s'", locale)
            return entry

    def _is_expired(self, entry: _LoadEntry) -> bool:
        expiry = self._config.expiry
        if expiry is None or entry.completed_at is None:
            return False
        return self._clock() - entry.completed_at >= expiry

    def _load(self, locale: Locale, entry: _LoadEntry) -> None:
        """Worker body: run the loader and publish the outcome on the entry."""
        if not entry.future.set_running_or_notify_cancel():
            return
        try:
            source = self._loader.load(locale)
        except Exception as e:  # noqa: BLE001 - any loader failure degrades to the default
            logger.warning(
                "Loading messages for locale '%s' failed, using default source: %s", locale, e
            )
            entry.completed_at = self._clock()
            entry.future.set_exception(e)
        else:
            entry.completed_at = self._clock()
            entry.future.set_result(source)

    def loaded_locales(self) -> tuple[Locale, ...]:
        """Locales with a completed load currently cached."""
        with self._lock:
            return tuple(
                locale for locale, entry in self._entries.items() if entry.future.done()
            )

    def close(self) -> None:
        """Stop the worker pool. Pending loads are cancelled."""
        self._executor.shutdown(wait=False, cancel_futures=True)
        with self._lock:
            for entry in self._entries.values():
                entry.future.cancel()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"LoadingMessageSourceProvider(loader={self._loader!r}, config={self._config!r})"


class LoadingMessageSourceProviderBuilder:
    """Builder for LoadingMessageSourceProvider. Not thread-safe."""

    __slots__ = ("_config", "_default_source", "_loader")

    def __init__(self) -> None:
        self._loader: MessageSourceLoader | None = None
        self._default_source: MessageSource | None = None
        self._config = LoadingConfig()

    def set_loader(self, loader: MessageSourceLoader) -> Self:
        """Set the loader (required).

        Raises:
            InvalidArgumentError: If loader is None
        """
        if loader is None:
            raise InvalidArgumentError(library_message("cfg.nullLoader"))
        self._loader = loader
        return self

    def set_default_source(self, source: MessageSource) -> Self:
        """Set the source used when loading yields nothing.

        Raises:
            InvalidArgumentError: If source is None
        """
        if source is None:
            raise InvalidArgumentError(library_message("cfg.nullSource"))
        self._default_source = source
        return self

    def set_load_timeout(self, seconds: float) -> Self:
        """Set how long a lookup waits for a load.

        Raises:
            InvalidArgumentError: If seconds is not positive
        """
        self._config = replace(self._config, timeout=require_positive_duration(seconds))
        return self

    def set_expiry(self, seconds: float) -> Self:
        """Set how long a load result is kept.

        Raises:
            InvalidArgumentError: If seconds is not positive
        """
        self._config = replace(self._config, expiry=require_positive_duration(seconds))
        return self

    def never_expire(self) -> Self:
        """Keep load results for the lifetime of the provider."""
        self._config = replace(self._config, expiry=None)
        return self

    def set_max_workers(self, count: int) -> Self:
        """Set the size of the loader thread pool.

        Raises:
            InvalidArgumentError: If count is not positive
        """
        self._config = replace(self._config, max_workers=count)
        return self

    def build(self) -> LoadingMessageSourceProvider:
        """Build the provider.

        Raises:
            InvalidArgumentError: If no loader has been set
        """
        if self._loader is None:
            raise InvalidArgumentError(
                library_message("cfg.noLoader"), code=DiagnosticCode.INVALID_CONFIGURATION
            )
        return LoadingMessageSourceProvider(
            self._loader, default_source=self._default_source, config=self._config
        )
