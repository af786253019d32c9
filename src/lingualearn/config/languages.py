"""Language registry loader.

Loads the languages offered by the catalog from data/config/languages_v1.yaml.

Usage:
    from lingualearn.config.languages import get_language, list_language_names

    spanish = get_language("Spanish")
    names = list_language_names()
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import structlog
import yaml

logger = structlog.get_logger(__name__)

# Config file path (relative to project root)
LANGUAGES_FILE = Path("data/config/languages_v1.yaml")


@dataclass
class LanguageInfo:
    """A language offered by the catalog."""

    name: str
    flag: str = ""
    locale: str = ""


# Module-level cache (insertion order is catalog order)
_cached_languages: dict[str, LanguageInfo] | None = None


def _get_default_languages() -> dict[str, LanguageInfo]:
    """Get default languages when config file is missing."""
    defaults = [
        LanguageInfo(name="Spanish", flag="🇪🇸", locale="es-ES"),
        LanguageInfo(name="French", flag="🇫🇷", locale="fr-FR"),
        LanguageInfo(name="German", flag="🇩🇪", locale="de-DE"),
        LanguageInfo(name="Italian", flag="🇮🇹", locale="it-IT"),
        LanguageInfo(name="Japanese", flag="🇯🇵", locale="ja-JP"),
        LanguageInfo(name="Mandarin", flag="🇨🇳", locale="zh-CN"),
        LanguageInfo(name="Korean", flag="🇰🇷", locale="ko-KR"),
    ]
    return {lang.name: lang for lang in defaults}


def load_languages(force_reload: bool = False) -> dict[str, LanguageInfo]:
    """Load all languages from config file.

    Args:
        force_reload: If True, ignore cache and reload from file.

    Returns:
        Dictionary mapping language name to LanguageInfo, in catalog order.
    """
    global _cached_languages

    if _cached_languages is not None and not force_reload:
        return _cached_languages

    if not LANGUAGES_FILE.exists():
        logger.debug("languages_file_not_found", path=str(LANGUAGES_FILE))
        _cached_languages = _get_default_languages()
        return _cached_languages

    try:
        data = yaml.safe_load(LANGUAGES_FILE.read_text(encoding="utf-8")) or {}
        entries = data.get("languages", [])

        languages: dict[str, LanguageInfo] = {}
        for entry in entries:
            if isinstance(entry, str):
                entry = {"name": entry}
            name = entry["name"]
            languages[name] = LanguageInfo(
                name=name,
                flag=entry.get("flag", ""),
                locale=entry.get("locale", ""),
            )

        if not languages:
            logger.warning("languages_file_empty", path=str(LANGUAGES_FILE))
            languages = _get_default_languages()

        logger.debug("loaded_languages", count=len(languages))
        _cached_languages = languages
        return _cached_languages

    except (yaml.YAMLError, OSError, KeyError, TypeError, AttributeError) as e:
        logger.error("failed_to_load_languages", error=str(e))
        _cached_languages = _get_default_languages()
        return _cached_languages


def get_language(name: str) -> LanguageInfo | None:
    """Get a language by name, or None if it is not offered."""
    return load_languages().get(name)


def list_language_names() -> list[str]:
    """List language names in catalog order."""
    return list(load_languages().keys())


def clear_languages_cache() -> None:
    """Clear the languages cache.

    Useful for testing or when languages are modified at runtime.
    """
    global _cached_languages
    _cached_languages = None
