"""Tests for MessageBundle lookup order, fallback and formatting.

Lookups are locale-major, provider-minor: every provider is asked for the
most specific locale before any provider is asked for the next one.

Python 3.13+.
"""

from __future__ import annotations

from unittest.mock import Mock, call

import pytest

from msgsimple.diagnostics import InvalidArgumentError, MessageFormatError
from msgsimple.locale_utils import CHINA, FRANCE, US, Locale
from msgsimple.messages import library_message
from msgsimple.runtime.bundle import MessageBundle
from msgsimple.source.map_source import MapMessageSource

KEY = "key"


def _source(pattern: str | None = None) -> Mock:
    source = Mock(spec=["get_key"])
    source.get_key.return_value = pattern
    return source


def _provider(source: object | None) -> Mock:
    provider = Mock(spec=["get_message_source"])
    provider.get_message_source.return_value = source
    return provider


def _bundle(*providers: object) -> MessageBundle:
    builder = MessageBundle.builder()
    for provider in providers:
        builder.append_provider(provider)
    return builder.freeze()


class TestNullArguments:
    """Null locale or key fail before any provider is consulted."""

    def test_null_key(self) -> None:
        """None key raises with the library's query.nullKey message."""
        provider = _provider(_source("x"))
        bundle = _bundle(provider)
        with pytest.raises(InvalidArgumentError) as exc_info:
            bundle.get_message(Locale.ROOT, None)  # type: ignore[arg-type]
        assert str(exc_info.value) == library_message("query.nullKey")
        provider.get_message_source.assert_not_called()

    def test_null_locale(self) -> None:
        """None locale raises with the library's query.nullLocale message."""
        provider = _provider(_source("x"))
        bundle = _bundle(provider)
        with pytest.raises(InvalidArgumentError) as exc_info:
            bundle.get_message(None, KEY)  # type: ignore[arg-type]
        assert str(exc_info.value) == library_message("query.nullLocale")
        provider.get_message_source.assert_not_called()

    def test_null_messages_are_library_texts(self) -> None:
        """The expected texts are the self-hosted ones."""
        assert library_message("query.nullKey") == "cannot query null key"
        assert library_message("query.nullLocale") == "cannot query null locale"

    def test_printf_checks_arguments_too(self) -> None:
        """printf() applies the same preconditions."""
        bundle = _bundle()
        with pytest.raises(InvalidArgumentError):
            bundle.printf(US, None)  # type: ignore[arg-type]


class TestLookupOrder:
    """Provider and locale ordering."""

    def test_all_locales_and_providers_tried_in_order(self) -> None:
        """Every (locale, provider) pair is tried, locale-major."""
        source1, source2 = _source(), _source()
        provider1, provider2 = _provider(source1), _provider(source2)
        calls = Mock()
        calls.attach_mock(provider1, "provider1")
        calls.attach_mock(provider2, "provider2")
        calls.attach_mock(source1, "source1")
        calls.attach_mock(source2, "source2")

        locale = Locale("ja", "JP", "JP")
        result = _bundle(provider1, provider2).get_message(locale, KEY)

        assert result == KEY
        expected = []
        for candidate in (locale, Locale("ja", "JP"), Locale("ja"), Locale.ROOT):
            expected += [
                call.provider1.get_message_source(candidate),
                call.source1.get_key(KEY),
                call.provider2.get_message_source(candidate),
                call.source2.get_key(KEY),
            ]
        assert calls.mock_calls == expected

    def test_prepended_provider_is_consulted_first(self) -> None:
        """prepend_provider() puts a provider ahead of the chain."""
        first, second = _provider(_source()), _provider(_source())
        calls = Mock()
        calls.attach_mock(first, "first")
        calls.attach_mock(second, "second")

        bundle = MessageBundle.builder().append_provider(second).prepend_provider(first).freeze()
        bundle.get_message(Locale.ROOT, KEY)

        assert calls.mock_calls[0] == call.first.get_message_source(Locale.ROOT)
        assert call.second.get_message_source(Locale.ROOT) in calls.mock_calls

    def test_stops_at_first_hit(self) -> None:
        """Nothing is consulted after the first pattern found."""
        source1 = _source("hit")
        provider1, provider2 = _provider(source1), _provider(_source("other"))

        result = _bundle(provider1, provider2).get_message(FRANCE, KEY)

        assert result == "hit"
        provider1.get_message_source.assert_called_once_with(FRANCE)
        source1.get_key.assert_called_once_with(KEY)
        provider2.get_message_source.assert_not_called()

    def test_more_specific_locale_beats_earlier_provider(self) -> None:
        """A later provider's exact-locale hit wins over an earlier provider's fallback."""
        generic = Mock(spec=["get_message_source"])
        generic.get_message_source.side_effect = (
            lambda locale: _source("generic") if locale.is_root else None
        )
        specific = _provider(_source("specific"))

        assert _bundle(generic, specific).get_message(FRANCE, KEY) == "specific"

    def test_none_source_skipped(self) -> None:
        """A provider with no source for a locale is skipped."""
        bundle = _bundle(_provider(None), _provider(_source("found")))
        assert bundle.get_message(US, KEY) == "found"

    def test_fallback_to_language(self) -> None:
        """zh_CN finds a key only present for zh."""
        zh = MapMessageSource.from_mapping({KEY: "value"})
        provider = Mock(spec=["get_message_source"])
        provider.get_message_source.side_effect = (
            lambda locale: zh if locale == Locale("zh") else None
        )
        assert _bundle(provider).get_message(CHINA, KEY) == "value"

    def test_exact_locale_source(self) -> None:
        """A source registered for zh_CN serves zh_CN directly."""
        source = MapMessageSource.from_mapping({KEY: "value"})
        bundle = MessageBundle.builder().append_source(source, CHINA).freeze()
        assert bundle.get_message(CHINA, KEY) == "value"

    def test_empty_pattern_is_a_hit(self) -> None:
        """An empty string is a found pattern, not a miss."""
        later = _provider(_source("later"))
        bundle = _bundle(_provider(_source("")), later)
        assert bundle.get_message(US, KEY) == ""
        later.get_message_source.assert_not_called()


class TestMisses:
    """Not-found behavior."""

    def test_empty_chain_returns_key(self) -> None:
        """No provider at all: the key comes back."""
        assert MessageBundle.builder().freeze().get_message(Locale.ROOT, KEY) == KEY

    def test_miss_with_arguments_returns_key_unformatted(self) -> None:
        """Arguments are discarded on a miss."""
        bundle = _bundle(_provider(_source()))
        assert bundle.get_message(US, "Hello {0}", "World") == "Hello {0}"

    def test_printf_miss_returns_key(self) -> None:
        """printf() returns the key verbatim on a miss, even with directives."""
        assert _bundle().printf(US, "%d%%") == "%d%%"


class TestMalfunction:
    """Provider and source exceptions propagate unchanged."""

    def test_source_error_propagates(self) -> None:
        """A failing source aborts the lookup."""
        source = Mock(spec=["get_key"])
        source.get_key.side_effect = RuntimeError("disk on fire")
        later = _provider(_source("never"))

        with pytest.raises(RuntimeError, match="disk on fire"):
            _bundle(_provider(source), later).get_message(US, KEY)
        later.get_message_source.assert_not_called()

    def test_provider_error_propagates(self) -> None:
        """A failing provider aborts the lookup."""
        provider = Mock(spec=["get_message_source"])
        provider.get_message_source.side_effect = OSError("unreachable")
        with pytest.raises(OSError, match="unreachable"):
            _bundle(provider).get_message(US, KEY)


class TestGetMessageFormatting:
    """Brace-style formatting through get_message()."""

    @pytest.fixture
    def bundle(self) -> MessageBundle:
        source = MapMessageSource.from_mapping(
            {
                "hello": "Hello {0}",
                "fear": "La {0} du {1}",
                "smell": "L'odeur du bug",
                "percent": "100%%",
            }
        )
        return MessageBundle.builder().append_source(source).freeze()

    def test_one_argument(self, bundle: MessageBundle) -> None:
        """A single argument is substituted."""
        assert bundle.get_message(Locale.ROOT, "hello", "World") == "Hello World"

    def test_none_argument(self, bundle: MessageBundle) -> None:
        """A single None argument still triggers formatting."""
        assert bundle.get_message(Locale.ROOT, "hello", None) == "Hello null"

    def test_two_arguments(self, bundle: MessageBundle) -> None:
        """Arguments are substituted by index."""
        assert bundle.get_message(FRANCE, "fear", "peur", "gendarme") == "La peur du gendarme"

    def test_apostrophe_kept_without_arguments(self, bundle: MessageBundle) -> None:
        """No arguments: the pattern comes back verbatim."""
        assert bundle.get_message(FRANCE, "smell") == "L'odeur du bug"

    def test_apostrophe_kept_with_arguments(self, bundle: MessageBundle) -> None:
        """Apostrophes are literal even when formatting."""
        assert bundle.get_message(FRANCE, "smell", "unused") == "L'odeur du bug"

    def test_no_arguments_leaves_placeholders(self, bundle: MessageBundle) -> None:
        """Without arguments the pattern is not formatted at all."""
        assert bundle.get_message(Locale.ROOT, "hello") == "Hello {0}"

    def test_printf_collapses_percent(self, bundle: MessageBundle) -> None:
        """printf() always formats; get_message() without args does not."""
        assert bundle.printf(US, "percent") == "100%"
        assert bundle.get_message(US, "percent") == "100%%"

    def test_resolve_pattern(self, bundle: MessageBundle) -> None:
        """resolve_pattern() gives the raw pattern or None."""
        assert bundle.resolve_pattern(US, "hello") == "Hello {0}"
        assert bundle.resolve_pattern(US, "missing") is None


class TestPrintf:
    """printf-style formatting through printf()."""

    def test_printf_formats(self) -> None:
        """Directives are rendered with the lookup locale."""
        source = MapMessageSource.from_mapping({"items": "%s has %d items"})
        bundle = MessageBundle.builder().append_source(source).freeze()
        assert bundle.printf(US, "items", "cart", 3) == "cart has 3 items"

    def test_printf_errors_propagate(self) -> None:
        """Missing arguments raise MessageFormatError."""
        source = MapMessageSource.from_mapping({"items": "%s has %d items"})
        bundle = MessageBundle.builder().append_source(source).freeze()
        with pytest.raises(MessageFormatError):
            bundle.printf(US, "items", "cart")


class TestImmutability:
    """Frozen bundles and thaw()."""

    def test_providers_tuple(self) -> None:
        """providers is a tuple in chain order."""
        first, second = _provider(None), _provider(None)
        assert _bundle(first, second).providers == (first, second)

    def test_thaw_is_copy_on_write(self) -> None:
        """Changing a thawed builder does not change the bundle."""
        original = _bundle(_provider(_source("a")))
        changed = original.thaw().prepend_provider(_provider(_source("b"))).freeze()

        assert original.get_message(US, KEY) == "a"
        assert changed.get_message(US, KEY) == "b"
        assert len(original.providers) == 1
        assert len(changed.providers) == 2

    def test_freeze_snapshots_builder(self) -> None:
        """A bundle does not see later builder changes."""
        builder = MessageBundle.builder().append_provider(_provider(_source("a")))
        bundle = builder.freeze()
        builder.prepend_provider(_provider(_source("b")))
        assert bundle.get_message(US, KEY) == "a"

    def test_repr(self) -> None:
        """repr() shows the chain length."""
        assert repr(_bundle(_provider(None))) == "MessageBundle(providers=1)"
