"""Translation loading for the ``airplane-mode`` text domain."""

from __future__ import annotations

import gettext
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

DOMAIN = "airplane-mode"
LOCALE_DIR = Path(__file__).parent / "locale"

_translations: gettext.NullTranslations = gettext.NullTranslations()


def load_textdomain(localedir: str | Path | None = None, languages: list[str] | None = None) -> None:
    """Install the catalog for the current locale; untranslated strings pass through."""
    global _translations
    _translations = gettext.translation(
        DOMAIN, localedir=str(localedir or LOCALE_DIR), languages=languages, fallback=True
    )
    logger.debug("Loaded text domain %s (%s)", DOMAIN, type(_translations).__name__)


def _(message: str) -> str:
    return _translations.gettext(message)
