"""Language constants and enums for internationalization."""

from enum import Enum


class Language(str, Enum):
    """Supported display languages."""
    TRADITIONAL_CHINESE = "zh-TW"
    ENGLISH = "en"


# Deployment-wide display language unless DISPLAY_LANGUAGE says otherwise
DEFAULT_LANGUAGE = Language.TRADITIONAL_CHINESE

LANGUAGE_NAMES = {
    Language.TRADITIONAL_CHINESE: "繁體中文",
    Language.ENGLISH: "English",
}
