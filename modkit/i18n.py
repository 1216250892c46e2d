"""
Translation Domains.

This module keeps the gettext domains contributed by modules.

Key features:
- Domain registration per module locale directory
- gettext lookup with fallback to the untranslated message
- Process-wide default locale
"""

import gettext
from pathlib import Path

# Global registry: domain -> locale directory
_domains: dict[str, Path] = {}

_locale: str | None = None


class TranslationError(Exception):
    """Base exception for translation errors."""

    pass


def register_domain(name: str, directory: Path) -> None:
    """
    Bind a translation domain to a locale directory.

    The directory uses the gettext layout
    (``<lang>/LC_MESSAGES/<domain>.mo``).

    Args:
        name: Domain name, usually the module name
        directory: Locale directory
    """
    _domains[name] = Path(directory)


def has_domain(name: str) -> bool:
    return name in _domains


def get_domain_dir(name: str) -> Path:
    """
    Get the locale directory of a domain.

    Raises:
        TranslationError: If the domain is not registered
    """
    if name not in _domains:
        raise TranslationError(f"Translation domain not registered: {name}")
    return _domains[name]


def set_locale(locale: str | None) -> None:
    """Set the locale used when translate() is called without one."""
    global _locale
    _locale = locale


def translate(message: str, domain: str, locale: str | None = None) -> str:
    """
    Translate *message* within *domain*.

    Unknown domains, locales and messages return the message unchanged.

    Args:
        message: Message to translate
        domain: Translation domain
        locale: Locale to use, defaults to the process-wide locale

    Returns:
        Translated message
    """
    directory = _domains.get(domain)
    if directory is None:
        return message

    locale = locale or _locale
    translation = gettext.translation(
        domain,
        localedir=str(directory),
        languages=[locale] if locale else None,
        fallback=True,
    )
    return translation.gettext(message)


def clear_domains() -> None:
    """Forget all registered domains."""
    _domains.clear()
