"""gettext catalog message source.

Adapts message catalogs read by Babel (``.po`` and ``.mo`` files) to the
MessageSource protocol, so existing gettext translations can take part in a
message bundle chain. Message ids act as keys.

Python 3.13+. Uses Babel for catalog parsing.
"""

from __future__ import annotations

import logging
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING

from babel.messages.mofile import read_mo
from babel.messages.pofile import read_po

from msgsimple.diagnostics import DiagnosticCode, InvalidArgumentError, SourceLoadError
from msgsimple.messages import library_message
from msgsimple.source.types import MessageKey, Pattern

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from typing import BinaryIO

    from babel.messages.catalog import Catalog

__all__ = ["CatalogMessageSource"]

logger = logging.getLogger(__name__)


def _catalog_entries(catalog: Catalog) -> dict[MessageKey, Pattern]:
    """Extract translated, non-fuzzy entries from a catalog.

    Plural entries are keyed by their singular id and expose their first
    translated form. The header entry (empty id) is skipped.
    """
    entries: dict[MessageKey, Pattern] = {}
    for message in catalog:
        if not message.id or message.fuzzy:
            continue
        msgid = message.id[0] if isinstance(message.id, (list, tuple)) else message.id
        translation = message.string
        if isinstance(translation, (list, tuple)):
            translation = translation[0] if translation else ""
        if not translation:
            continue
        entries[msgid] = translation
    return entries


class CatalogMessageSource:
    """Immutable message source over a gettext catalog.

    Untranslated and fuzzy entries are absent, so lookups fall through to
    the next provider or locale instead of returning an empty string.

    Example:
        >>> source = CatalogMessageSource.from_po("locale/fr/LC_MESSAGES/app.po")
        >>> source.get_key("Hello {0}")
        'Bonjour {0}'
    """

    __slots__ = ("_messages", "locale", "path")

    def __init__(
        self,
        messages: Mapping[MessageKey, Pattern],
        *,
        locale: str | None = None,
        path: str | None = None,
    ) -> None:
        """Initialize from extracted entries. Prefer the from_* factories.

        Args:
            messages: Key to pattern mapping (copied)
            locale: Catalog locale, for diagnostics
            path: File the catalog was read from, for diagnostics
        """
        self._messages: Mapping[MessageKey, Pattern] = MappingProxyType(dict(messages))
        self.locale = locale
        self.path = path

    @classmethod
    def from_catalog(cls, catalog: Catalog, *, path: str | None = None) -> CatalogMessageSource:
        """Wrap an already parsed Babel catalog."""
        locale = str(catalog.locale) if catalog.locale is not None else None
        entries = _catalog_entries(catalog)
        logger.debug("Loaded %d catalog entries (locale=%s)", len(entries), locale)
        return cls(entries, locale=locale, path=path)

    @classmethod
    def from_po(cls, path: str | Path) -> CatalogMessageSource:
        """Read a ``.po`` file.

        Raises:
            InvalidArgumentError: If path is None
            SourceLoadError: If the file cannot be read or parsed
        """
        return cls._read(path, read_po)

    @classmethod
    def from_mo(cls, path: str | Path) -> CatalogMessageSource:
        """Read a compiled ``.mo`` file.

        Raises:
            InvalidArgumentError: If path is None
            SourceLoadError: If the file cannot be read or parsed
        """
        return cls._read(path, read_mo)

    @classmethod
    def _read(
        cls, path: str | Path, reader: Callable[[BinaryIO], Catalog]
    ) -> CatalogMessageSource:
        if path is None:
            raise InvalidArgumentError(library_message("cfg.nullPath"))
        file_path = Path(path)
        try:
            with file_path.open("rb") as fileobj:
                catalog = reader(fileobj)
        except OSError as e:
            raise SourceLoadError(
                library_message("source.readFailed", str(file_path), e), path=str(file_path)
            ) from e
        except (ValueError, UnicodeDecodeError) as e:
            raise SourceLoadError(
                library_message("source.readFailed", str(file_path), e),
                path=str(file_path),
                code=DiagnosticCode.SOURCE_PARSE_FAILED,
            ) from e
        return cls.from_catalog(catalog, path=str(file_path))

    def get_key(self, key: MessageKey) -> Pattern | None:
        """Look up the translation for a message id."""
        return self._messages.get(key)

    def __len__(self) -> int:
        return len(self._messages)

    def __repr__(self) -> str:
        return f"CatalogMessageSource(locale={self.locale!r}, keys={len(self._messages)})"
