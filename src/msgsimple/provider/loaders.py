"""Message source loaders for LoadingMessageSourceProvider.

Python 3.13+.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from msgsimple.constants import DEFAULT_ENCODING, PROPERTIES_SUFFIX
from msgsimple.diagnostics import DiagnosticCode, InvalidArgumentError
from msgsimple.messages import library_message
from msgsimple.source.properties import PropertiesMessageSource

if TYPE_CHECKING:
    from msgsimple.locale_utils import Locale

__all__ = ["PropertiesLoader"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PropertiesLoader:
    """Loads ``<directory>/<basename>[_<locale>].properties`` files.

    The root locale maps to ``<basename>.properties``. Every other locale
    maps to its exact file only: ``fr_FR`` never reads ``messages_fr``,
    since the bundle already walks the fallback sequence.

    Security:
        Locale tags containing path separators or ".." are rejected, and
        the resolved file must lie inside the directory.

    Example:
        >>> loader = PropertiesLoader("i18n", "messages")
        >>> loader.path_for(FRANCE)
        PosixPath('i18n/messages_fr_FR.properties')
        >>> loader.path_for(Locale.ROOT)
        PosixPath('i18n/messages.properties')

    Attributes:
        directory: Directory holding the files
        basename: File name prefix
        encoding: Text encoding of the files
    """

    directory: Path | str
    basename: str
    encoding: str = DEFAULT_ENCODING
    _resolved_root: Path = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Resolve the root directory once.

        Raises:
            InvalidArgumentError: If directory or basename is None
        """
        if self.directory is None or self.basename is None:
            raise InvalidArgumentError(library_message("cfg.nullPath"))
        object.__setattr__(self, "directory", Path(self.directory))
        object.__setattr__(self, "_resolved_root", Path(self.directory).resolve())

    def path_for(self, locale: Locale) -> Path:
        """Get the file path for a locale (the file may not exist).

        Raises:
            InvalidArgumentError: If the locale tag is unsafe in a file name
        """
        tag = str(locale)
        if ".." in tag or "/" in tag or "\\" in tag:
            raise InvalidArgumentError(
                library_message("cfg.unsafeLocale", tag), code=DiagnosticCode.UNSAFE_LOCALE_PATH
            )
        suffix = f"_{tag}" if tag else ""
        return Path(self.directory) / f"{self.basename}{suffix}{PROPERTIES_SUFFIX}"

    def load(self, locale: Locale) -> PropertiesMessageSource | None:
        """Read the file of a locale.

        Returns:
            The parsed source, or None if the file does not exist

        Raises:
            InvalidArgumentError: If the path is unsafe
            SourceLoadError: If the file exists but cannot be read or parsed
        """
        path = self.path_for(locale)
        if not path.resolve().is_relative_to(self._resolved_root):
            raise InvalidArgumentError(
                library_message("cfg.pathEscapesRoot", str(path), str(self._resolved_root)),
                code=DiagnosticCode.UNSAFE_LOCALE_PATH,
            )
        if not path.is_file():
            logger.debug("No properties file for locale '%s' at %s", locale, path)
            return None
        return PropertiesMessageSource.from_path(path, self.encoding)
