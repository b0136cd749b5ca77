"""Message sources: key to pattern lookups.

Public API:
    MessageSource - Protocol implemented by every source
    MapMessageSource - Immutable in-memory source (with builder)
    PropertiesMessageSource - Source read once from properties text or file
    ReloadingMessageSource - Properties file re-read after an expiry
    CatalogMessageSource - gettext .po/.mo catalog read with Babel
    parse_properties - Properties text parser

Python 3.13+.
"""

from .catalog import CatalogMessageSource
from .map_source import MapMessageSource, MapMessageSourceBuilder
from .properties import PropertiesMessageSource, ReloadingMessageSource, parse_properties
from .types import MessageKey, MessageSource, Pattern

__all__ = [
    "CatalogMessageSource",
    "MapMessageSource",
    "MapMessageSourceBuilder",
    "MessageKey",
    "MessageSource",
    "Pattern",
    "PropertiesMessageSource",
    "ReloadingMessageSource",
    "parse_properties",
]
