"""Brace-style message formatting.

Substitutes positional placeholders in a pattern with rendered arguments:

    {0}                      default rendering of argument 0
    {0,number}               grouped decimal, up to 3 fraction digits
    {0,number,integer}       rounded (half-even) grouped integer
    {0,number,percent}       percentage
    {0,number,#,##0.00}      CLDR number pattern
    {0,date[,style]}         date; style is short|medium|long|full or a pattern
    {0,time[,style]}         time; same styles

Everything else is literal text. Apostrophes carry no quoting meaning, an
index with no matching argument stays as written, and so do unknown format
types. Formatting never raises: an argument that cannot be rendered the
requested way falls back to its default rendering.

Python 3.13+. Uses Babel (through LocaleContext) for locale-sensitive output.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from typing import TYPE_CHECKING

from msgsimple.constants import NULL_TEXT
from msgsimple.diagnostics import MessageFormatError
from msgsimple.runtime.locale_context import DATE_STYLES, LocaleContext

if TYPE_CHECKING:
    from msgsimple.locale_utils import Locale

__all__ = ["format_message"]

logger = logging.getLogger(__name__)

# {index} or {index,type} or {index,type,style}; the style may contain commas
_PLACEHOLDER = re.compile(r"\{(\d+)(?:,([^{},]*)(?:,([^{}]*))?)?\}")

_FORMAT_TYPES = frozenset({"number", "date", "time"})


def _render_typed(
    context: LocaleContext, value: object, format_type: str, style: str | None
) -> str | None:
    """Render a typed placeholder. None means "leave the placeholder as is"."""
    match format_type:
        case "number":
            if style is None:
                return context.format_number(value)  # type: ignore[arg-type]
            if style == "integer":
                return context.format_number(value, integer=True)  # type: ignore[arg-type]
            if style == "percent":
                return context.format_percent(value)  # type: ignore[arg-type]
            if style == "currency":
                return None
            return context.format_number(value, pattern=style)  # type: ignore[arg-type]
        case "date":
            return context.format_date(value, _date_style(style))  # type: ignore[arg-type]
        case _:
            return context.format_time(value, _date_style(style))  # type: ignore[arg-type]


def _render_default(context: LocaleContext, value: object, placeholder: str) -> str:
    try:
        return context.format_value(value)
    except MessageFormatError as e:
        logger.debug("Placeholder %s fell back to str(): %s", placeholder, e)
        return str(value)


def _date_style(style: str | None) -> str:
    if style is None:
        return "medium"
    return style.lower() if style.lower() in DATE_STYLES else style


def format_message(pattern: str, locale: Locale, args: Sequence[object]) -> str:
    """Format a brace-style pattern.

    Args:
        pattern: Pattern with {i} placeholders
        locale: Locale for number and date rendering
        args: Positional arguments (never mutated)

    Returns:
        Formatted text

    Examples:
        >>> format_message("Hello {0}", Locale.ROOT, ["World"])
        'Hello World'
        >>> format_message("La {0} du {1}", FRANCE, ["peur", "gendarme"])
        'La peur du gendarme'
        >>> format_message("L'odeur du {0}", FRANCE, ["bug"])
        "L'odeur du bug"
        >>> format_message("{0} and {1}", Locale.ROOT, [None])
        'null and {1}'
    """
    context: LocaleContext | None = None

    def replace(match: re.Match[str]) -> str:
        nonlocal context
        index = int(match.group(1))
        if index >= len(args):
            return match.group(0)

        raw_type = match.group(2)
        format_type = raw_type.strip().lower() if raw_type is not None else None
        if format_type is not None and format_type not in _FORMAT_TYPES:
            return match.group(0)

        value = args[index]
        if value is None:
            return NULL_TEXT
        if format_type is None and isinstance(value, str):
            return value
        if context is None:
            context = LocaleContext.for_locale(locale)
        if format_type is None:
            return _render_default(context, value, match.group(0))

        style = (match.group(3) or "").strip() or None
        try:
            rendered = _render_typed(context, value, format_type, style)
        except MessageFormatError as e:
            logger.debug("Placeholder %s fell back to default rendering: %s", match.group(0), e)
            return _render_default(context, value, match.group(0))
        return match.group(0) if rendered is None else rendered

    return _PLACEHOLDER.sub(replace, pattern)
