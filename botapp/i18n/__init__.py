"""Internationalization support for the bot's fixed display language.

Usage:
    from botapp.i18n import create_translator

    tr = create_translator('zh-TW')
    text = tr.t('form.error.conflict', user_name='Bob')
"""

from .languages import DEFAULT_LANGUAGE, LANGUAGE_NAMES, Language
from .translator import Translator, create_translator

__all__ = [
    'Language',
    'DEFAULT_LANGUAGE',
    'LANGUAGE_NAMES',
    'Translator',
    'create_translator',
]
