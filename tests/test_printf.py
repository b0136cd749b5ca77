"""Tests for printf-style formatting (format_printf).

Python 3.13+.
"""

from __future__ import annotations

from decimal import Decimal

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from msgsimple.diagnostics import DiagnosticCode, MessageFormatError
from msgsimple.locale_utils import FRANCE, GERMANY, US, Locale
from msgsimple.messages import library_message
from msgsimple.runtime.printf import format_printf
from tests.strategies import literal_text


class TestStrings:
    """%s, %r, %a and %c."""

    def test_string(self) -> None:
        """%s uses str()."""
        assert format_printf("Hello %s", US, ["World"]) == "Hello World"

    def test_none_is_null(self) -> None:
        """None with %s renders as null."""
        assert format_printf("Hello %s", US, [None]) == "Hello null"

    def test_repr(self) -> None:
        """%r uses repr()."""
        assert format_printf("%r", US, ["x"]) == "'x'"

    def test_ascii(self) -> None:
        """%a uses ascii()."""
        assert format_printf("%a", US, ["é"]) == "'\\xe9'"

    def test_width_and_justification(self) -> None:
        """Width pads on the left, '-' pads on the right."""
        assert format_printf("[%5s]", US, ["ab"]) == "[   ab]"
        assert format_printf("[%-5s]", US, ["ab"]) == "[ab   ]"

    def test_precision_truncates(self) -> None:
        """Precision truncates strings."""
        assert format_printf("%.3s", US, ["abcdef"]) == "abc"

    def test_char(self) -> None:
        """%c accepts code points and one-character strings."""
        assert format_printf("%c%c", US, [65, "b"]) == "Ab"

    def test_char_mismatch(self) -> None:
        """%c rejects longer strings."""
        with pytest.raises(MessageFormatError) as exc_info:
            format_printf("%c", US, ["ab"])
        assert exc_info.value.code == DiagnosticCode.FORMAT_TYPE_MISMATCH


class TestIntegers:
    """%d, %i, %u, %x, %X and %o."""

    def test_decimal(self) -> None:
        """%d renders integers."""
        assert format_printf("%d items", US, [3]) == "3 items"

    def test_negative_uses_locale_minus(self) -> None:
        """Negative numbers carry the locale's minus sign."""
        assert format_printf("%d", US, [-42]) == "-42"

    def test_grouping_flag(self) -> None:
        """',' groups with the locale's separator."""
        assert format_printf("%,d", US, [1234567]) == "1,234,567"
        assert format_printf("%,d", GERMANY, [1234567]) == "1.234.567"

    def test_no_grouping_by_default(self) -> None:
        """Without ',' numbers are not grouped."""
        assert format_printf("%d", US, [1234567]) == "1234567"

    def test_sign_flags(self) -> None:
        """'+' and ' ' control the sign of positive numbers."""
        assert format_printf("%+d", US, [5]) == "+5"
        assert format_printf("% d", US, [5]) == " 5"

    def test_zero_padding(self) -> None:
        """'0' pads with zeros after the sign."""
        assert format_printf("%05d", US, [-42]) == "-0042"

    def test_zero_padding_is_grouped(self) -> None:
        """With ',' the padding zeros are grouped like the digits."""
        assert format_printf("%,010d", US, [1234]) == "00,001,234"
        assert format_printf("%,010d", GERMANY, [1234]) == "00.001.234"
        assert format_printf("%,010d", US, [-1234]) == "-0,001,234"
        assert format_printf("%,012.2f", US, [1234.5]) == "0,001,234.50"

    def test_zero_padding_never_starts_with_separator(self) -> None:
        """A width landing on a separator gets one more zero."""
        assert format_printf("%,08d", US, [1234]) == "0,001,234"

    def test_precision_pads_digits(self) -> None:
        """Precision sets a minimum digit count."""
        assert format_printf("%.3d", US, [7]) == "007"

    def test_float_truncated(self) -> None:
        """Floats are truncated by %d."""
        assert format_printf("%d", US, [3.9]) == "3"

    def test_hex_and_octal(self) -> None:
        """Radix conversions, with '#' prefixes."""
        assert format_printf("%x %X %o", US, [255, 255, 8]) == "ff FF 10"
        assert format_printf("%#x %#o", US, [255, 8]) == "0xff 0o10"

    def test_hex_zero_padding_after_prefix(self) -> None:
        """Zero padding goes between the prefix and the digits."""
        assert format_printf("%#06x", US, [31]) == "0x001f"

    def test_hex_rejects_float(self) -> None:
        """Radix conversions need integers."""
        with pytest.raises(MessageFormatError):
            format_printf("%x", US, [1.5])

    def test_string_rejected(self) -> None:
        """Strings are not numbers."""
        with pytest.raises(MessageFormatError) as exc_info:
            format_printf("%d", US, ["3"])
        assert exc_info.value.code == DiagnosticCode.FORMAT_TYPE_MISMATCH
        assert str(exc_info.value) == library_message("format.typeMismatch", "%d", "str")

    def test_bool_rejected(self) -> None:
        """Booleans are not numbers."""
        with pytest.raises(MessageFormatError):
            format_printf("%d", US, [True])

    def test_infinity_rejected(self) -> None:
        """Infinity has no integer value."""
        with pytest.raises(MessageFormatError):
            format_printf("%d", US, [float("inf")])


class TestFloats:
    """%f, %e, %g and their uppercase forms."""

    def test_fixed(self) -> None:
        """%f defaults to six fraction digits."""
        assert format_printf("%f", US, [1.5]) == "1.500000"

    def test_precision(self) -> None:
        """Precision sets the fraction digits."""
        assert format_printf("%.2f", US, [3.14159]) == "3.14"

    def test_localized_decimal_separator(self) -> None:
        """French and German use a decimal comma."""
        assert format_printf("%.2f", FRANCE, [3.14159]) == "3,14"
        assert format_printf("%,.2f", GERMANY, [1234.5]) == "1.234,50"

    def test_exponent(self) -> None:
        """%e keeps its exponent sign."""
        assert format_printf("%.2e", US, [12345.678]) == "1.23e+04"
        assert format_printf("%.1E", US, [0.00012]) == "1.2E-04"

    def test_general(self) -> None:
        """%g drops trailing zeros."""
        assert format_printf("%g", US, [2.5]) == "2.5"

    def test_negative_zero(self) -> None:
        """Negative zero keeps its sign."""
        assert format_printf("%.1f", US, [-0.0]) == "-0.0"

    def test_decimal_argument(self) -> None:
        """Decimal values are accepted."""
        assert format_printf("%.2f", US, [Decimal("2.675")]) == "2.68"

    def test_int_argument(self) -> None:
        """Integers are accepted by float conversions."""
        assert format_printf("%.1f", US, [2]) == "2.0"

    def test_width(self) -> None:
        """Width and zero padding apply to floats."""
        assert format_printf("[%8.2f]", US, [3.14159]) == "[    3.14]"
        assert format_printf("%08.2f", US, [-3.14159]) == "-0003.14"

    def test_nan_not_zero_padded(self) -> None:
        """nan is padded with spaces."""
        assert format_printf("%05f", US, [float("nan")]) == "  nan"

    @given(value=st.floats(allow_nan=False, allow_infinity=False, width=32))
    def test_us_matches_python(self, value: float) -> None:
        """Without grouping, US English output equals Python's own."""
        assert format_printf("%.3f", US, [value]) == "%.3f" % value  # noqa: UP031


class TestArguments:
    """Argument selection and errors."""

    def test_explicit_index(self) -> None:
        """index$ selects arguments, 1-based."""
        assert format_printf("%2$s %1$s", US, ["world", "hello"]) == "hello world"

    def test_explicit_index_does_not_advance(self) -> None:
        """Explicit indices leave the implicit counter alone."""
        assert format_printf("%2$s %s %s", US, ["a", "b"]) == "b a b"

    def test_extra_arguments_ignored(self) -> None:
        """Unused arguments are fine."""
        assert format_printf("%s", US, ["a", "b", "c"]) == "a"

    def test_missing_argument(self) -> None:
        """A directive without an argument raises."""
        with pytest.raises(MessageFormatError) as exc_info:
            format_printf("%s and %s", US, ["a"])
        error = exc_info.value
        assert error.code == DiagnosticCode.FORMAT_ARGUMENT_MISSING
        assert error.pattern == "%s and %s"
        assert str(error) == library_message("format.missingArgument", "%s")

    def test_missing_explicit_argument(self) -> None:
        """An explicit index past the arguments raises."""
        with pytest.raises(MessageFormatError):
            format_printf("%3$s", US, ["a"])

    def test_index_zero_invalid(self) -> None:
        """Indices are 1-based."""
        with pytest.raises(MessageFormatError) as exc_info:
            format_printf("%0$s", US, ["a"])
        assert exc_info.value.code == DiagnosticCode.FORMAT_DIRECTIVE_INVALID


class TestDirectives:
    """Literal and malformed directives."""

    def test_percent_literal(self) -> None:
        """%% emits a single percent sign."""
        assert format_printf("100%%", US, []) == "100%"

    def test_newline(self) -> None:
        """%n emits a newline."""
        assert format_printf("a%nb", US, []) == "a\nb"

    @pytest.mark.parametrize("pattern", ["%", "50%!", "%q", "%-"])
    def test_invalid(self, pattern: str) -> None:
        """Unknown or unterminated directives raise."""
        with pytest.raises(MessageFormatError) as exc_info:
            format_printf(pattern, US, ["x"])
        assert exc_info.value.code == DiagnosticCode.FORMAT_DIRECTIVE_INVALID
        assert exc_info.value.pattern == pattern

    def test_root_locale(self) -> None:
        """The root locale uses English symbols."""
        assert format_printf("%,.1f", Locale.ROOT, [1234.5]) == "1,234.5"

    @given(text=literal_text)
    def test_literal_text_unchanged(self, text: str) -> None:
        """Text without '%' is returned as is."""
        assert format_printf(text, US, []) == text


_PATTERN_TOKENS = st.sampled_from([
    "%", "%%", "%s", "%r", "%d", "%+05d", "%,d", "%.2f", "%-8.3e", "%g", "%#x", "%o",
    "%c", "%n", "%2$s", "%1$d", "%q", "abc", " ", "$", ".",
])

_ANY_ARGUMENT = st.one_of(
    st.none(),
    st.booleans(),
    st.integers(),
    st.floats(),
    st.text(max_size=3),
)


@pytest.mark.fuzz
class TestPrintfFuzz:
    """Arbitrary directive soups either render or raise MessageFormatError."""

    @given(
        tokens=st.lists(_PATTERN_TOKENS, max_size=12),
        args=st.lists(_ANY_ARGUMENT, max_size=4),
    )
    @settings(max_examples=2000)
    def test_only_format_errors_escape(self, tokens: list[str], args: list[object]) -> None:
        pattern = "".join(tokens)
        try:
            result = format_printf(pattern, GERMANY, args)
        except MessageFormatError as e:
            assert e.pattern == pattern
        else:
            assert isinstance(result, str)
