"""Translation service for the fixed display language."""

from __future__ import annotations
from tracking import t

from typing import Any, Optional

from .languages import DEFAULT_LANGUAGE, Language
from .strings import STRINGS


class Translator:
    """Looks up display strings for one language."""

    def __init__(self, language: str | Language = DEFAULT_LANGUAGE):
        t('botapp.i18n.translator.Translator.__init__')
        if isinstance(language, Language):
            self.language = language.value
        else:
            self.language = str(language)

    def t(self, key: str, **params: Any) -> str:
        """Translate a key, substituting ``params``.

        Example:
            >>> Translator('en').t('form.error.conflict', user_name='Bob')
            'Time conflict! Already booked by Bob'
        """
        t('botapp.i18n.translator.Translator.t')
        default_lang = DEFAULT_LANGUAGE.value
        lang_strings = STRINGS.get(self.language, STRINGS[default_lang])
        translated = lang_strings.get(key)

        if translated is None:
            translated = STRINGS[default_lang].get(key, f"[{key}]")

        if params:
            try:
                translated = translated.format(**params)
            except KeyError:
                pass

        return translated

    def get_language(self) -> str:
        t('botapp.i18n.translator.Translator.get_language')
        return self.language


def create_translator(language: Optional[str | Language] = None) -> Translator:
    """Return a translator for ``language`` (the default language if None)."""
    t('botapp.i18n.translator.create_translator')
    if language is None:
        language = DEFAULT_LANGUAGE
    return Translator(language)
