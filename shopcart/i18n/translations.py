"""Internationalization for user-facing cart messages"""

import json
from pathlib import Path
from typing import Any

SUPPORTED_LANGUAGES = {
    "pt": "Português",
    "en": "English",
    "ru": "Русский",
}

DEFAULT_LANGUAGE = "en"

LOCALES_PATH = Path(__file__).parent / "locales"

# Cache for loaded translations
_translations: dict[str, dict[str, Any]] = {}


def _load_translations(lang: str) -> dict[str, Any]:
    """Load translations for a language"""
    if lang in _translations:
        return _translations[lang]

    file_path = LOCALES_PATH / f"{lang}.json"

    if not file_path.exists():
        if lang != DEFAULT_LANGUAGE:
            return _load_translations(DEFAULT_LANGUAGE)
        return {}

    with open(file_path, encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        return {}
    _translations[lang] = data
    return data


def _lookup(translations: dict[str, Any], key: str) -> Any:
    """Resolve a dotted key ("cart.add_failed") in a nested dict."""
    current: Any = translations
    for part in key.split("."):
        if not isinstance(current, dict) or part not in current:
            return None
        current = current[part]
    return current


def get_text(key: str, lang: str = DEFAULT_LANGUAGE, default: str | None = None, **kwargs) -> str:
    """
    Get translated text by key.

    Args:
        key: Translation key (e.g., "cart.out_of_stock")
        lang: Language code (e.g., "pt", "pt-BR", "en")
        default: Returned instead of the key when nothing matches
        **kwargs: Variables to format into the string

    Returns:
        Translated string or key/default if not found
    """
    lang = detect_language(lang)

    text = _lookup(_load_translations(lang), key)

    if text is None and lang != DEFAULT_LANGUAGE:
        text = _lookup(_load_translations(DEFAULT_LANGUAGE), key)

    # Missing, or a partial key pointing at a section
    if not isinstance(text, str):
        return default if default is not None else key

    if kwargs:
        try:
            return text.format(**kwargs)
        except (KeyError, ValueError, IndexError):
            return text

    return text


def detect_language(language_code: str | None) -> str:
    """
    Normalize a language code ("pt-BR" -> "pt").

    Unsupported or empty codes fall back to DEFAULT_LANGUAGE.
    """
    if not language_code:
        return DEFAULT_LANGUAGE

    lang = language_code.split("-")[0].split("_")[0].lower()
    return lang if lang in SUPPORTED_LANGUAGES else DEFAULT_LANGUAGE


def reload_translations() -> None:
    """Clear translation cache"""
    _translations.clear()
