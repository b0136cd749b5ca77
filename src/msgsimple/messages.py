"""msgsimple's own diagnostic messages.

The library produces its error texts with its own lookup machinery: a
MessageBundle over a MapMessageSource, registered like any other library
bundle. Tests compare exception messages against library_message() so the
expected text is never duplicated.

Python 3.13+.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

from msgsimple.locale_utils import Locale
from msgsimple.registry import get_bundle

if TYPE_CHECKING:
    from msgsimple.runtime.bundle import MessageBundle

__all__ = ["LIBRARY_MESSAGES", "LibraryMessages", "library_message"]

LIBRARY_MESSAGES = MappingProxyType({
    # Lookups
    "query.nullKey": "cannot query null key",
    "query.nullLocale": "cannot query null locale",
    # Builders and configuration
    "cfg.nullProvider": "provider cannot be null",
    "cfg.nullSource": "source cannot be null",
    "cfg.nullLocale": "locale cannot be null",
    "cfg.nullKey": "key cannot be null",
    "cfg.nullValue": "value cannot be null",
    "cfg.nullMap": "map cannot be null",
    "cfg.nullLoader": "loader cannot be null",
    "cfg.noLoader": "no loader has been provided",
    "cfg.nullPath": "path cannot be null",
    "cfg.nonPositiveDuration": "duration must be strictly positive (got {0})",
    "cfg.nonPositiveWorkers": "worker count must be strictly positive (got {0})",
    "cfg.unsafeLocale": "locale {0} cannot be used to build a file name",
    "cfg.pathEscapesRoot": "resolved path {0} escapes directory {1}",
    # printf-style formatting
    "format.missingArgument": "format specifier {0} has no matching argument",
    "format.typeMismatch": "format specifier {0} cannot render a value of type {1}",
    "format.invalidDirective": "invalid format specifier {0} in pattern {1}",
    # File-backed sources
    "source.readFailed": "cannot read message source {0}: {1}",
})


class LibraryMessages:
    """Bundle provider for msgsimple's own messages."""

    def get_bundle(self) -> MessageBundle:
        # Lazy imports: the runtime package imports this module
        from msgsimple.runtime.bundle import MessageBundle  # noqa: PLC0415
        from msgsimple.source.map_source import MapMessageSource  # noqa: PLC0415

        source = MapMessageSource.from_mapping(LIBRARY_MESSAGES)
        return MessageBundle.builder().append_source(source).freeze()


def library_message(key: str, *args: object) -> str:
    """Resolve one of msgsimple's own messages.

    Args:
        key: Key in LIBRARY_MESSAGES
        *args: Brace-style format arguments

    Returns:
        Resolved message text
    """
    return get_bundle(LibraryMessages).get_message(Locale.ROOT, key, *args)
