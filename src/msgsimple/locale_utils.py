"""Locale value type and locale fallback sequences.

Provides the immutable Locale identifier used as lookup input, parsing from
POSIX or BCP-47 style tags, the fallback sequence generator used by
MessageBundle, and conversion to Babel locales for locale-sensitive
formatting.

Python 3.13+.
"""

from __future__ import annotations

import functools
import logging
import os
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from msgsimple.constants import FALLBACK_BABEL_LOCALE, MAX_LOCALE_CACHE_SIZE

if TYPE_CHECKING:
    from babel import Locale as BabelLocale

__all__ = [
    "CANADA",
    "CANADA_FRENCH",
    "CHINA",
    "ENGLISH",
    "FRANCE",
    "FRENCH",
    "GERMAN",
    "GERMANY",
    "ITALY",
    "JAPAN",
    "KOREA",
    "ROOT",
    "UK",
    "US",
    "Locale",
    "clear_locale_cache",
    "get_applicable",
    "get_babel_locale",
    "get_system_locale",
    "normalize_locale",
    "parse_locale",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Locale:
    """Immutable locale identifier: language, country and variant.

    Components are plain strings; an empty component means "unspecified".
    The locale with all three components empty is the root locale, the
    least specific locale of every fallback sequence.

    Use parse_locale() to build instances from tags; direct construction
    does not normalize case.

    Examples:
        >>> Locale("fr", "FR")
        Locale('fr_FR')
        >>> str(Locale("ja", "JP", "JP"))
        'ja_JP_JP'
        >>> Locale.ROOT.is_root
        True
    """

    ROOT: ClassVar[Locale]

    language: str = ""
    country: str = ""
    variant: str = ""

    def __str__(self) -> str:
        """Return POSIX-style tag ('ja_JP_JP', 'fr', '_US', '' for root)."""
        if self.variant:
            return f"{self.language}_{self.country}_{self.variant}"
        if self.country:
            return f"{self.language}_{self.country}"
        return self.language

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return f"Locale({str(self)!r})"

    @property
    def is_root(self) -> bool:
        """Check if this is the root locale (no component specified)."""
        return not (self.language or self.country or self.variant)


Locale.ROOT = Locale()

ROOT = Locale.ROOT
ENGLISH = Locale("en")
FRENCH = Locale("fr")
GERMAN = Locale("de")
US = Locale("en", "US")
UK = Locale("en", "GB")
CANADA = Locale("en", "CA")
CANADA_FRENCH = Locale("fr", "CA")
FRANCE = Locale("fr", "FR")
GERMANY = Locale("de", "DE")
ITALY = Locale("it", "IT")
JAPAN = Locale("ja", "JP")
KOREA = Locale("ko", "KR")
CHINA = Locale("zh", "CN")


def normalize_locale(locale_code: str) -> str:
    """Convert BCP-47 locale code to POSIX separator style.

    BCP-47 uses hyphens (en-US), while POSIX tags use underscores (en_US).

    Args:
        locale_code: BCP-47 or POSIX locale code (e.g., "en-US", "pt_BR")

    Returns:
        Locale code with underscores (e.g., "en_US", "pt_BR")

    Example:
        >>> normalize_locale("en-US")
        'en_US'
        >>> normalize_locale("en")
        'en'
    """
    return locale_code.replace("-", "_")


def parse_locale(locale_code: str) -> Locale:
    """Parse a locale tag into a Locale.

    The tag is split on underscores into at most three parts: language,
    country and variant. Anything after the second separator belongs to the
    variant. Language is lowercased, country uppercased, variant kept as is.

    Args:
        locale_code: Tag such as "fr", "fr_FR", "ja_JP_JP" or "en-US".
            The empty string denotes the root locale.

    Returns:
        Parsed Locale

    Raises:
        InvalidArgumentError: If locale_code is None

    Example:
        >>> parse_locale("ja_JP_JP")
        Locale('ja_JP_JP')
        >>> parse_locale("en-us")
        Locale('en_US')
        >>> parse_locale("") is Locale.ROOT
        True
    """
    if locale_code is None:
        # Lazy import: msgsimple.messages builds a bundle on top of this module
        from msgsimple.diagnostics import InvalidArgumentError  # noqa: PLC0415
        from msgsimple.messages import library_message  # noqa: PLC0415

        raise InvalidArgumentError(library_message("cfg.nullLocale"))

    parts = normalize_locale(locale_code).split("_", 2)
    language = parts[0].lower()
    country = parts[1].upper() if len(parts) > 1 else ""
    variant = parts[2] if len(parts) > 2 else ""

    if not (language or country or variant):
        return Locale.ROOT
    return Locale(language, country, variant)


def get_applicable(locale: Locale) -> tuple[Locale, ...]:
    """Get the fallback sequence for a locale, most specific first.

    Starts with the locale itself, then drops the variant, then the country,
    and always ends with the root locale. Steps that would not change the
    locale are skipped, so the sequence never contains duplicates and the
    root locale alone yields a sequence of length one.

    Args:
        locale: Requested locale

    Returns:
        Tuple of candidate locales ending with Locale.ROOT

    Example:
        >>> get_applicable(parse_locale("ja_JP_JP"))
        (Locale('ja_JP_JP'), Locale('ja_JP'), Locale('ja'), Locale(''))
        >>> get_applicable(Locale.ROOT)
        (Locale(''),)
    """
    candidates = [
        locale,
        Locale(locale.language, locale.country),
        Locale(locale.language),
        Locale.ROOT,
    ]
    # dict.fromkeys() removes duplicates while maintaining insertion order
    return tuple(dict.fromkeys(candidates))


@functools.lru_cache(maxsize=MAX_LOCALE_CACHE_SIZE)
def get_babel_locale(locale: Locale) -> BabelLocale:
    """Get the Babel Locale used to render numbers and dates for a locale.

    Walks the fallback sequence of the locale and returns the first
    candidate known to CLDR. The root locale and locales with no known
    candidate use FALLBACK_BABEL_LOCALE.

    Thread-safe via lru_cache internal locking.

    Args:
        locale: Requested locale

    Returns:
        Babel Locale object

    Example:
        >>> get_babel_locale(parse_locale("de_DE")).territory
        'DE'
        >>> get_babel_locale(parse_locale("ja_JP_JP")).territory
        'JP'
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale as BabelLocale  # noqa: PLC0415
    from babel import UnknownLocaleError  # noqa: PLC0415

    for candidate in get_applicable(locale):
        if candidate.is_root:
            break
        try:
            return BabelLocale.parse(str(candidate))
        except (UnknownLocaleError, ValueError) as e:
            logger.debug("Babel does not know locale '%s': %s", candidate, e)

    return BabelLocale.parse(FALLBACK_BABEL_LOCALE)


def clear_locale_cache() -> None:
    """Clear the Babel locale cache."""
    get_babel_locale.cache_clear()


def get_system_locale() -> Locale:
    """Detect the process default locale from the OS and environment.

    Detection order:
    1. Python locale.getlocale() (OS-level locale)
    2. LC_ALL environment variable (overrides all)
    3. LC_MESSAGES environment variable (for message catalogs)
    4. LANG environment variable (default locale)

    Encoding suffixes are stripped. "C" and "POSIX" pseudo-locales are
    ignored.

    Returns:
        Detected Locale, or Locale.ROOT if none is configured.

    Example:
        >>> import os
        >>> os.environ['LANG'] = 'de_DE.UTF-8'
        >>> get_system_locale()
        Locale('de_DE')
    """
    import locale as locale_module  # noqa: PLC0415

    try:
        system_locale, _ = locale_module.getlocale()
        if system_locale and system_locale not in ("C", "POSIX"):
            return parse_locale(system_locale.split(".")[0])
    except (ValueError, AttributeError):
        pass

    for var in ("LC_ALL", "LC_MESSAGES", "LANG"):
        value = os.environ.get(var)
        if value and value not in ("C", "POSIX"):
            return parse_locale(value.split(".")[0])

    return Locale.ROOT
