"""Runtime: message bundles and formatters.

Public API:
    MessageBundle - Immutable provider chain with lookup and formatting
    MessageBundleBuilder - Mutable builder for MessageBundle
    format_message - Brace-style formatter ("Hello {0}")
    format_printf - printf-style formatter ("Hello %s")
    LocaleContext - Babel-backed number and date rendering

Python 3.13+.
"""

from .builder import MessageBundleBuilder
from .bundle import MessageBundle
from .formatter import format_message
from .locale_context import LocaleContext
from .printf import format_printf

__all__ = [
    "LocaleContext",
    "MessageBundle",
    "MessageBundleBuilder",
    "format_message",
    "format_printf",
]
