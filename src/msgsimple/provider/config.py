"""Configuration for LoadingMessageSourceProvider.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass

from msgsimple.constants import DEFAULT_EXPIRY, DEFAULT_LOAD_TIMEOUT, DEFAULT_LOADER_WORKERS
from msgsimple.diagnostics import DiagnosticCode, InvalidArgumentError
from msgsimple.messages import library_message

__all__ = ["LoadingConfig", "require_positive_duration"]


def require_positive_duration(seconds: float) -> float:
    """Validate a duration in seconds.

    Raises:
        InvalidArgumentError: If seconds is None, zero or negative
    """
    if seconds is None or seconds <= 0:
        raise InvalidArgumentError(
            library_message("cfg.nonPositiveDuration", seconds),
            code=DiagnosticCode.INVALID_CONFIGURATION,
        )
    return seconds


@dataclass(frozen=True, slots=True)
class LoadingConfig:
    """Immutable timing configuration of a loading provider.

    Attributes:
        timeout: Seconds a lookup waits for a load before using the default
            source (default: 1.0)
        expiry: Seconds a loaded source (or a failed load) is kept before
            the next lookup reloads it; None keeps it forever (default: 600)
        max_workers: Threads of the loader pool (default: 4)

    Example:
        >>> config = LoadingConfig(timeout=0.5, expiry=None)
        >>> config.expiry is None
        True
    """

    timeout: float = DEFAULT_LOAD_TIMEOUT
    expiry: float | None = DEFAULT_EXPIRY
    max_workers: int = DEFAULT_LOADER_WORKERS

    def __post_init__(self) -> None:
        """Validate configuration values at construction time.

        Raises:
            InvalidArgumentError: If timeout, expiry or max_workers is not
                positive
        """
        require_positive_duration(self.timeout)
        if self.expiry is not None:
            require_positive_duration(self.expiry)
        if self.max_workers <= 0:
            raise InvalidArgumentError(
                library_message("cfg.nonPositiveWorkers", self.max_workers),
                code=DiagnosticCode.INVALID_CONFIGURATION,
            )
