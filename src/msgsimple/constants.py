"""Shared constants for msgsimple.

Centralized defaults used across the source, provider and runtime packages.
Placing constants here avoids circular imports and provides a single source
of truth.

Constants are grouped by domain:
- Formatting: text substituted for absent arguments, Babel fallback locale
- Loading: timeouts and expiry for lazily loaded or reloaded sources
- Cache limits: memory bounds for locale caches

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Formatting
    "NULL_TEXT",
    "FALLBACK_BABEL_LOCALE",
    # Loading
    "DEFAULT_ENCODING",
    "DEFAULT_LOAD_TIMEOUT",
    "DEFAULT_EXPIRY",
    "DEFAULT_LOADER_WORKERS",
    "PROPERTIES_SUFFIX",
    # Cache limits
    "MAX_LOCALE_CACHE_SIZE",
]

# ============================================================================
# FORMATTING
# ============================================================================

# Rendering of an absent (None) format argument, in both formatting styles.
NULL_TEXT: str = "null"

# Babel locale used for number/date rendering when neither the requested
# locale nor any of its fallbacks is known to CLDR (including the root locale).
FALLBACK_BABEL_LOCALE: str = "en"

# ============================================================================
# LOADING
# ============================================================================

DEFAULT_ENCODING: str = "utf-8"

# Seconds a caller waits for a lazily loaded source before using the default.
DEFAULT_LOAD_TIMEOUT: float = 1.0

# Seconds before a loaded or file-backed source is considered stale.
DEFAULT_EXPIRY: float = 600.0

DEFAULT_LOADER_WORKERS: int = 4

PROPERTIES_SUFFIX: str = ".properties"

# ============================================================================
# CACHE LIMITS
# ============================================================================

MAX_LOCALE_CACHE_SIZE: int = 128
