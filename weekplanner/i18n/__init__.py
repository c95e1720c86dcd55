# -*- coding: utf-8 -*-
"""
Internationalization (i18n) module for the planner.

This module provides translation functions and language management.
Supports English and Portuguese with automatic system locale detection.
"""

import locale
from typing import Callable, List

from weekplanner.i18n.translations import DEFAULT_QUOTES, TRANSLATIONS

# Supported languages
SUPPORTED_LANGUAGES = ["en", "pt"]

# Current language (default to English)
_current_language = "en"

# Callbacks to notify when language changes
_language_changed_callbacks: List[Callable[[str], None]] = []


def detect_system_language() -> str:
    """
    Detect the system language and return a supported language code.

    Returns:
        'pt' if Portuguese is detected, 'en' otherwise.
    """
    system_locale = locale.getlocale()[0]
    if system_locale and system_locale.lower().startswith('pt'):
        return 'pt'
    return 'en'


def get_language() -> str:
    """Get the current language code."""
    return _current_language


def set_language(lang: str) -> None:
    """
    Set the current label language.

    Args:
        lang: Language code ('en', 'pt' or 'auto')
    """
    global _current_language
    if lang == 'auto':
        lang = detect_system_language()
    if lang not in SUPPORTED_LANGUAGES:
        lang = 'en'
    _current_language = lang

    for callback in _language_changed_callbacks:
        callback(lang)


def tr(key: str, **kwargs) -> str:
    """
    Get the translated string for the given key.

    Args:
        key: Translation key (e.g., 'report.title')
        **kwargs: Format arguments for string interpolation

    Returns:
        Translated string, or the key itself if not found.
    """
    translations = TRANSLATIONS.get(_current_language, TRANSLATIONS['en'])
    text = translations.get(key, key)

    if kwargs:
        try:
            text = text.format(**kwargs)
        except (KeyError, ValueError):
            pass

    return text


def default_quotes() -> List[str]:
    """Built-in quotes for the current language"""
    return list(DEFAULT_QUOTES.get(_current_language, DEFAULT_QUOTES['en']))


def day_label(day: str, long: bool = False) -> str:
    """Short ('Mon') or long ('Monday') label of a day key"""
    value = getattr(day, "value", day)
    if long:
        text = tr(f"day.long.{value}")
        return tr("day.long.unknown") if text == f"day.long.{value}" else text
    return tr(f"day.{value}")


def on_language_changed(callback: Callable[[str], None]) -> None:
    """
    Register a callback to be notified when language changes.

    Args:
        callback: Function that takes the new language code as argument.
    """
    if callback not in _language_changed_callbacks:
        _language_changed_callbacks.append(callback)


def remove_language_callback(callback: Callable[[str], None]) -> None:
    """Remove a previously registered language change callback."""
    if callback in _language_changed_callbacks:
        _language_changed_callbacks.remove(callback)

