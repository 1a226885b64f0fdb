# -*- coding: utf-8 -*-
"""Centralized Translation Manager for user-facing messages."""

from services.translations.en import EN_TRANSLATIONS


class TranslationManager:
    """Singleton holding the message catalogue."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._translations = EN_TRANSLATIONS
        return cls._instance

    def tr(self, key: str, **kwargs) -> str:
        translation = self._translations.get(key)
        if translation is None:
            return key
        if kwargs:
            try:
                translation = translation.format(**kwargs)
            except (KeyError, ValueError):
                pass
        return translation


_translator = TranslationManager()


def tr(key: str, **kwargs) -> str:
    return _translator.tr(key, **kwargs)
