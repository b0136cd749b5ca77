"""printf-style message formatting.

Directive grammar:

    %[index$][flags][width][.precision]conversion

    index       1-based argument position; does not advance the implicit
                argument counter
    flags       '-' left-justify, '+' always sign, ' ' space for positive,
                '#' alternate form, '0' zero padding, ',' locale grouping
    conversion  s r a       str(), repr(), ascii() (None with %s -> 'null')
                d i u       decimal integer
                f F e E g G floating point
                x X o       hexadecimal and octal integer
                c           character (int code point or 1-char string)
                %           literal '%'
                n           newline

Decimal conversions (d i u f F e E g G) are localized: the decimal
separator, grouping separator and minus sign come from the locale's CLDR
number symbols. Hexadecimal and octal output is not localized.

Unlike brace-style formatting, printf-style formatting is strict: a missing
argument, an argument of the wrong type or a malformed directive raises
MessageFormatError. Extra arguments are ignored.

Python 3.13+. Uses Babel (through LocaleContext) for number symbols.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING

from msgsimple.constants import NULL_TEXT
from msgsimple.diagnostics import DiagnosticCode, MessageFormatError
from msgsimple.messages import library_message
from msgsimple.runtime.locale_context import LocaleContext, NumberSymbols

if TYPE_CHECKING:
    from msgsimple.locale_utils import Locale

__all__ = ["format_printf"]

_DIRECTIVE = re.compile(
    r"%(?:(?P<index>\d+)\$)?(?P<flags>[-+ #0,]*)(?P<width>\d+)?(?:\.(?P<precision>\d+))?"
    r"(?P<conversion>[sradiufFeEgGxXoc%n])"
)

_STRING_CONVERSIONS = frozenset("sra")
_INTEGER_CONVERSIONS = frozenset("diu")
_FLOAT_CONVERSIONS = frozenset("fFeEgG")


@dataclass(frozen=True, slots=True)
class _Directive:
    text: str
    index: int | None
    flags: str
    width: int
    precision: int | None
    conversion: str

    @classmethod
    def from_match(cls, match: re.Match[str]) -> _Directive:
        index = match.group("index")
        width = match.group("width")
        precision = match.group("precision")
        return cls(
            text=match.group(0),
            index=int(index) if index is not None else None,
            flags=match.group("flags"),
            width=int(width) if width is not None else 0,
            precision=int(precision) if precision is not None else None,
            conversion=match.group("conversion"),
        )


def _is_real(value: object) -> bool:
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def _group(digits: str, separator: str) -> str:
    """Insert a separator every three digits from the right."""
    head = len(digits) % 3 or 3
    parts = [digits[:head]]
    parts.extend(digits[i : i + 3] for i in range(head, len(digits), 3))
    return separator.join(parts)


def _localize(
    body: str, directive: _Directive, symbols: NumberSymbols, *, fill_width: int = 0
) -> str:
    """Apply grouping and the decimal symbol to an unsigned number body.

    With the ',' flag, zero fill up to fill_width goes into the digits
    before grouping, so separators also land between the padding zeros.
    """
    leading = re.match(r"\d+", body)
    if leading is None:
        # inf and nan
        return body
    integer_part = leading.group(0)
    rest = body[len(integer_part) :]
    if rest.startswith("."):
        rest = symbols.decimal + rest[1:]
    if "," not in directive.flags:
        return integer_part + rest
    grouped = _group(integer_part, symbols.group)
    while len(grouped) + len(rest) < fill_width:
        integer_part = "0" + integer_part
        grouped = _group(integer_part, symbols.group)
    return grouped + rest


def _sign(negative: bool, directive: _Directive, minus: str) -> str:
    if negative:
        return minus
    if "+" in directive.flags:
        return "+"
    if " " in directive.flags:
        return " "
    return ""


def _zero_fill_width(sign: str, directive: _Directive) -> int:
    if "0" not in directive.flags or "-" in directive.flags:
        return 0
    return directive.width - len(sign)


def _pad(sign: str, body: str, directive: _Directive, *, zero_fill: bool) -> str:
    width = directive.width
    if len(sign) + len(body) >= width:
        return sign + body
    if "-" in directive.flags:
        return (sign + body).ljust(width)
    if zero_fill and "0" in directive.flags:
        return sign + body.rjust(width - len(sign), "0")
    return (sign + body).rjust(width)


class _PrintfRenderer:
    """Renders one pattern; holds the implicit argument counter."""

    __slots__ = ("_args", "_context", "_locale", "_next", "_pattern")

    def __init__(self, pattern: str, locale: Locale, args: Sequence[object]) -> None:
        self._pattern = pattern
        self._locale = locale
        self._args = args
        self._next = 0
        self._context: LocaleContext | None = None

    @property
    def symbols(self) -> NumberSymbols:
        if self._context is None:
            self._context = LocaleContext.for_locale(self._locale)
        return self._context.number_symbols()

    def render(self) -> str:
        parts: list[str] = []
        position = 0
        pattern = self._pattern
        while (percent := pattern.find("%", position)) != -1:
            parts.append(pattern[position:percent])
            match = _DIRECTIVE.match(pattern, percent)
            if match is None:
                bad = pattern[percent : percent + 2]
                raise MessageFormatError(
                    library_message("format.invalidDirective", bad, pattern), pattern=pattern
                )
            parts.append(self._convert(_Directive.from_match(match)))
            position = match.end()
        parts.append(pattern[position:])
        return "".join(parts)

    def _argument(self, directive: _Directive) -> object:
        if directive.index is not None:
            if directive.index == 0:
                raise MessageFormatError(
                    library_message("format.invalidDirective", directive.text, self._pattern),
                    pattern=self._pattern,
                )
            position = directive.index - 1
        else:
            position = self._next
            self._next += 1
        if position >= len(self._args):
            raise MessageFormatError(
                library_message("format.missingArgument", directive.text),
                pattern=self._pattern,
                code=DiagnosticCode.FORMAT_ARGUMENT_MISSING,
            )
        return self._args[position]

    def _mismatch(self, directive: _Directive, value: object) -> MessageFormatError:
        return MessageFormatError(
            library_message("format.typeMismatch", directive.text, type(value).__name__),
            pattern=self._pattern,
            code=DiagnosticCode.FORMAT_TYPE_MISMATCH,
        )

    def _convert(self, directive: _Directive) -> str:
        conversion = directive.conversion
        if conversion == "%":
            return "%"
        if conversion == "n":
            return "\n"

        value = self._argument(directive)
        if conversion in _STRING_CONVERSIONS:
            return self._string(directive, value)
        if conversion == "c":
            return self._char(directive, value)
        if not _is_real(value):
            raise self._mismatch(directive, value)
        if conversion in _INTEGER_CONVERSIONS:
            return self._integer(directive, value)  # type: ignore[arg-type]
        if conversion in _FLOAT_CONVERSIONS:
            return self._float(directive, value)  # type: ignore[arg-type]
        return self._radix(directive, value)  # type: ignore[arg-type]

    def _string(self, directive: _Directive, value: object) -> str:
        match directive.conversion:
            case "s":
                text = NULL_TEXT if value is None else str(value)
            case "r":
                text = repr(value)
            case _:
                text = ascii(value)
        if directive.precision is not None:
            text = text[: directive.precision]
        return _pad("", text, directive, zero_fill=False)

    def _char(self, directive: _Directive, value: object) -> str:
        if isinstance(value, str) and len(value) == 1:
            text = value
        elif isinstance(value, int) and not isinstance(value, bool):
            try:
                text = chr(value)
            except (ValueError, OverflowError) as e:
                raise self._mismatch(directive, value) from e
        else:
            raise self._mismatch(directive, value)
        return _pad("", text, directive, zero_fill=False)

    def _integer(self, directive: _Directive, value: int | float | Decimal) -> str:
        try:
            number = int(value)
        except (ValueError, OverflowError) as e:
            # inf and nan have no integer value
            raise self._mismatch(directive, value) from e
        body = str(abs(number))
        if directive.precision is not None:
            body = body.zfill(directive.precision)
        symbols = self.symbols
        sign = _sign(number < 0, directive, symbols.minus)
        body = _localize(body, directive, symbols, fill_width=_zero_fill_width(sign, directive))
        return _pad(sign, body, directive, zero_fill=True)

    def _float(self, directive: _Directive, value: int | float | Decimal) -> str:
        precision = 6 if directive.precision is None else directive.precision
        spec = f"{'#' if '#' in directive.flags else ''}.{precision}{directive.conversion}"
        # str() keeps the sign of -0.0 and of signed Decimal NaN
        negative = str(value).startswith("-")
        body = format(abs(value), spec)
        symbols = self.symbols
        sign = _sign(negative, directive, symbols.minus)
        body = _localize(body, directive, symbols, fill_width=_zero_fill_width(sign, directive))
        return _pad(sign, body, directive, zero_fill=body[:1].isdigit())

    def _radix(self, directive: _Directive, value: int | float | Decimal) -> str:
        if not isinstance(value, int):
            raise self._mismatch(directive, value)
        prefix = f"0{directive.conversion}" if "#" in directive.flags else ""
        body = format(abs(value), directive.conversion)
        sign = _sign(value < 0, directive, "-") + prefix
        return _pad(sign, body, directive, zero_fill=True)


def format_printf(pattern: str, locale: Locale, args: Sequence[object]) -> str:
    """Format a printf-style pattern.

    Args:
        pattern: Pattern with % directives
        locale: Locale for number symbols
        args: Positional arguments (never mutated)

    Returns:
        Formatted text

    Raises:
        MessageFormatError: On a missing argument, an argument of the wrong
            type, or a malformed directive

    Examples:
        >>> format_printf("%s has %d items", US, ["cart", 3])
        'cart has 3 items'
        >>> format_printf("%2$s %1$s", US, ["world", "hello"])
        'hello world'
        >>> format_printf("%,.2f", GERMANY, [1234.5])
        '1.234,50'
        >>> format_printf("100%%", US, [])
        '100%'
    """
    return _PrintfRenderer(pattern, locale, args).render()
