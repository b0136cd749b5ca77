"""Message source providers: locale to source lookups.

Public API:
    MessageSourceProvider - Protocol implemented by every provider
    MessageSourceLoader - Protocol for on-demand source loading
    StaticMessageSourceProvider - Fixed locale to source mapping
    LoadingMessageSourceProvider - Lazy, cached, time-bounded loading
    LoadingConfig - Timing configuration of the loading provider
    PropertiesLoader - Loader for per-locale properties files

Python 3.13+.
"""

from .config import LoadingConfig
from .loaders import PropertiesLoader
from .loading import LoadingMessageSourceProvider, LoadingMessageSourceProviderBuilder
from .static import StaticMessageSourceProvider, StaticMessageSourceProviderBuilder
from .types import MessageSourceLoader, MessageSourceProvider

__all__ = [
    "LoadingConfig",
    "LoadingMessageSourceProvider",
    "LoadingMessageSourceProviderBuilder",
    "MessageSourceLoader",
    "MessageSourceProvider",
    "PropertiesLoader",
    "StaticMessageSourceProvider",
    "StaticMessageSourceProviderBuilder",
]
