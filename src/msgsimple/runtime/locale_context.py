"""Locale context for locale-sensitive argument rendering.

Both formatters render numbers and dates through a LocaleContext, which
wraps the Babel locale chosen for a msgsimple Locale. No dependency on
Python's locale module: Babel is thread-safe and CLDR-based, setlocale()
is neither.

Architecture:
    - LocaleContext: Immutable pairing of a Locale and its Babel locale
    - NumberSymbols: CLDR separators used by printf-style conversions
    - Rendering failures raise MessageFormatError; callers decide whether
      to fall back (brace style) or propagate (printf style)

Python 3.13+. Uses Babel for i18n.
"""

from __future__ import annotations

import functools
import logging
from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING

from babel import dates as babel_dates
from babel import numbers as babel_numbers

from msgsimple.constants import FALLBACK_BABEL_LOCALE, MAX_LOCALE_CACHE_SIZE, NULL_TEXT
from msgsimple.diagnostics import DiagnosticCode, MessageFormatError
from msgsimple.locale_utils import get_babel_locale

if TYPE_CHECKING:
    from babel import Locale as BabelLocale

    from msgsimple.locale_utils import Locale

__all__ = ["DATE_STYLES", "LocaleContext", "NumberSymbols"]

logger = logging.getLogger(__name__)

DATE_STYLES: frozenset[str] = frozenset({"short", "medium", "long", "full"})


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


@dataclass(frozen=True, slots=True)
class NumberSymbols:
    """CLDR number symbols of a locale."""

    decimal: str
    group: str
    minus: str


@dataclass(frozen=True, slots=True)
class LocaleContext:
    """Immutable locale configuration for formatting operations.

    Use LocaleContext.for_locale() to obtain instances; it caches one
    context per Locale.

    Examples:
        >>> ctx = LocaleContext.for_locale(parse_locale("de_DE"))
        >>> ctx.format_number(1234.5)
        '1.234,5'
        >>> ctx.is_fallback
        False

        >>> LocaleContext.for_locale(Locale.ROOT).is_fallback
        True

    Thread Safety:
        Immutable. Babel formatting functions are thread-safe.
    """

    locale: Locale
    babel_locale: BabelLocale
    is_fallback: bool = False

    @classmethod
    def for_locale(cls, locale: Locale) -> LocaleContext:
        """Get the (cached) context for a locale.

        Locales unknown to CLDR, and the root locale, render with the
        fallback Babel locale; is_fallback reports it.
        """
        return _context_for(locale)

    @classmethod
    def clear_cache(cls) -> None:
        """Clear the context cache. Use in tests or to free memory."""
        _context_for.cache_clear()

    def number_symbols(self) -> NumberSymbols:
        """Get decimal, grouping and minus symbols for this locale."""
        return NumberSymbols(
            decimal=babel_numbers.get_decimal_symbol(self.babel_locale),
            group=babel_numbers.get_group_symbol(self.babel_locale),
            minus=babel_numbers.get_minus_sign_symbol(self.babel_locale),
        )

    def format_number(
        self,
        value: int | float | Decimal,
        *,
        pattern: str | None = None,
        integer: bool = False,
    ) -> str:
        """Format a number with locale-specific separators.

        Args:
            value: Number to format
            pattern: CLDR number pattern (e.g., '#,##0.00'); overrides integer
            integer: Round to an integer (half-even) with grouping

        Returns:
            Formatted number; by default grouped with up to 3 fraction digits

        Raises:
            MessageFormatError: If value is not a number or pattern is invalid

        Example:
            >>> LocaleContext.for_locale(US).format_number(1234.5678)
            '1,234.568'
            >>> LocaleContext.for_locale(US).format_number(2.5, integer=True)
            '2'
        """
        self._require_number(value)
        if pattern is None and integer:
            pattern = "#,##0"
        try:
            return str(
                babel_numbers.format_decimal(value, format=pattern, locale=self.babel_locale)
            )
        except (ValueError, TypeError, InvalidOperation) as e:
            msg = f"Number formatting failed for '{value}': {e}"
            raise MessageFormatError(msg, code=DiagnosticCode.FORMAT_TYPE_MISMATCH) from e

    def format_percent(self, value: int | float | Decimal) -> str:
        """Format a ratio as a percentage (0.25 -> '25%').

        Raises:
            MessageFormatError: If value is not a number
        """
        self._require_number(value)
        try:
            return str(babel_numbers.format_percent(value, locale=self.babel_locale))
        except (ValueError, TypeError, InvalidOperation) as e:
            msg = f"Percent formatting failed for '{value}': {e}"
            raise MessageFormatError(msg, code=DiagnosticCode.FORMAT_TYPE_MISMATCH) from e

    def format_date(self, value: date, style: str = "medium") -> str:
        """Format the date part of a date or datetime.

        Args:
            value: date or datetime
            style: 'short', 'medium', 'long', 'full' or a CLDR date pattern

        Raises:
            MessageFormatError: If value is not a date or pattern is invalid
        """
        if not isinstance(value, date):
            msg = f"Cannot format {type(value).__name__} as a date"
            raise MessageFormatError(msg, code=DiagnosticCode.FORMAT_TYPE_MISMATCH)
        try:
            return str(babel_dates.format_date(value, format=style, locale=self.babel_locale))
        except (ValueError, KeyError, AttributeError) as e:
            msg = f"Date formatting failed for '{value}': {e}"
            raise MessageFormatError(msg, code=DiagnosticCode.FORMAT_TYPE_MISMATCH) from e

    def format_time(self, value: time | datetime, style: str = "medium") -> str:
        """Format the time part of a time or datetime.

        Args:
            value: time or datetime (a plain date has no time part)
            style: 'short', 'medium', 'long', 'full' or a CLDR time pattern

        Raises:
            MessageFormatError: If value has no time part or pattern is invalid
        """
        if not isinstance(value, (time, datetime)):
            msg = f"Cannot format {type(value).__name__} as a time"
            raise MessageFormatError(msg, code=DiagnosticCode.FORMAT_TYPE_MISMATCH)
        try:
            return str(babel_dates.format_time(value, format=style, locale=self.babel_locale))
        except (ValueError, KeyError, AttributeError) as e:
            msg = f"Time formatting failed for '{value}': {e}"
            raise MessageFormatError(msg, code=DiagnosticCode.FORMAT_TYPE_MISMATCH) from e

    def format_value(self, value: object) -> str:
        """Render an argument the default way.

        None renders as 'null', booleans with str(), numbers with the
        locale's default decimal format, datetimes as short date and short
        time, dates and times in their short style. Anything else uses
        str().

        Example:
            >>> ctx = LocaleContext.for_locale(FRANCE)
            >>> ctx.format_value(None), ctx.format_value(True), ctx.format_value(2.5)
            ('null', 'True', '2,5')
        """
        if value is None:
            return NULL_TEXT
        if isinstance(value, bool):
            return str(value)
        if _is_number(value):
            return self.format_number(value)  # type: ignore[arg-type]
        if isinstance(value, datetime):
            return str(
                babel_dates.format_datetime(value, format="short", locale=self.babel_locale)
            )
        if isinstance(value, date):
            return self.format_date(value, "short")
        if isinstance(value, time):
            return self.format_time(value, "short")
        return str(value)

    @staticmethod
    def _require_number(value: object) -> None:
        if not _is_number(value):
            msg = f"Cannot format {type(value).__name__} as a number"
            raise MessageFormatError(msg, code=DiagnosticCode.FORMAT_TYPE_MISMATCH)


@functools.lru_cache(maxsize=MAX_LOCALE_CACHE_SIZE)
def _context_for(locale: Locale) -> LocaleContext:
    babel_locale = get_babel_locale(locale)
    is_fallback = locale.is_root or babel_locale.language != locale.language
    if is_fallback and not locale.is_root:
        logger.warning(
            "No CLDR data for locale '%s', formatting with '%s'", locale, FALLBACK_BABEL_LOCALE
        )
    return LocaleContext(locale=locale, babel_locale=babel_locale, is_fallback=is_fallback)
