"""Locale utilities for hover and report text.

Locale identifiers come from file and folder names (``en``, ``pt-BR``,
``zh_Hant``) and are never validated. Babel is only used to render a
readable name next to the code; codes Babel does not know are shown as is.

Python 3.13+.
"""

from __future__ import annotations

import functools
import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "describe_locale",
    "get_babel_locale",
    "normalize_locale",
]

logger = logging.getLogger(__name__)


def normalize_locale(locale_code: str) -> str:
    """Convert BCP-47 locale code to POSIX format for Babel.

    Example:
        >>> normalize_locale("pt-BR")
        'pt_BR'
        >>> normalize_locale("en")  # Already normalized
        'en'
    """
    return locale_code.replace("-", "_")


@functools.lru_cache(maxsize=128)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Args:
        locale_code: Locale code (BCP-47 or POSIX format accepted)

    Returns:
        Babel Locale object

    Raises:
        babel.core.UnknownLocaleError: If locale is not recognized
        ValueError: If locale format is invalid
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(normalize_locale(locale_code))


@functools.lru_cache(maxsize=256)
def describe_locale(locale_code: str, display_locale: str = "en") -> str:
    """Render a locale code with its display name.

    Args:
        locale_code: Locale identifier taken from a file or folder name
        display_locale: Language the display name is written in

    Returns:
        ``"<code> (<name>)"``, or the bare code when Babel does not know it

    Example:
        >>> describe_locale("de")
        'de (German)'
        >>> describe_locale("pt-BR")
        'pt-BR (Portuguese (Brazil))'
        >>> describe_locale("xx-custom")
        'xx-custom'
    """
    from babel import UnknownLocaleError  # noqa: PLC0415

    try:
        name = get_babel_locale(locale_code).get_display_name(
            get_babel_locale(display_locale)
        )
    except (UnknownLocaleError, ValueError) as e:
        logger.debug("No display name for locale '%s': %s", locale_code, e)
        return locale_code
    if not name:
        return locale_code
    return f"{locale_code} ({name})"
