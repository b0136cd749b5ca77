"""msgsimple - Locale-aware message lookup with provider chains.

Looks up message patterns by key through an ordered chain of message source
providers, falling back from the requested locale to less specific ones
down to the root locale, and formats the result brace-style or
printf-style.

Public API:
    MessageBundle - Immutable provider chain; get_message() and printf()
    MessageBundleBuilder - Assembles a MessageBundle
    Locale - Immutable locale identifier
    parse_locale - Parse "fr_FR" or "fr-FR" into a Locale
    MapMessageSource - In-memory message source
    StaticMessageSourceProvider - Fixed locale to source provider
    LoadingMessageSourceProvider - Lazily loading provider

Exceptions:
    MsgSimpleError - Base exception class
    InvalidArgumentError - Null or invalid caller input
    MessageFormatError - printf-style rendering failure
    SourceLoadError - File-backed source could not be read

Submodules:
    msgsimple.source - Message sources (map, properties, gettext catalogs)
    msgsimple.provider - Providers, loaders and their configuration
    msgsimple.runtime - Bundle, builder and formatters
    msgsimple.registry - Process-wide bundle registry
    msgsimple.messages - msgsimple's own diagnostic messages
"""

from .diagnostics import (
    InvalidArgumentError,
    MessageFormatError,
    MsgSimpleError,
    SourceLoadError,
)
from .locale_utils import Locale, parse_locale
from .provider import LoadingMessageSourceProvider, StaticMessageSourceProvider
from .runtime import MessageBundle, MessageBundleBuilder
from .source import MapMessageSource

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("msgsimple")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "InvalidArgumentError",
    "LoadingMessageSourceProvider",
    "Locale",
    "MapMessageSource",
    "MessageBundle",
    "MessageBundleBuilder",
    "MessageFormatError",
    "MsgSimpleError",
    "SourceLoadError",
    "StaticMessageSourceProvider",
    "__version__",
    "parse_locale",
]
