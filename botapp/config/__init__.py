"""Structured configuration loaders for the Telegram bot runtime."""

from __future__ import annotations
from tracking import t

from dataclasses import dataclass
from typing import Optional

from infrastructure.settings import AppSettings, get_settings


@dataclass(frozen=True)
class TelegramConfig:
    """Telegram-specific settings for the bot runtime."""

    token: str
    production_mode: bool


@dataclass(frozen=True)
class StoreConfig:
    """Where bookings live and how long writes may take."""

    backend: str
    collection: str
    timeout_seconds: float
    firestore_project: Optional[str]
    firestore_credentials_file: Optional[str]


@dataclass(frozen=True)
class DisplayConfig:
    """Locale, timezone, and notification behaviour for chat output."""

    language: str
    timezone: str
    notification_seconds: float


@dataclass(frozen=True)
class BotAppConfig:
    """Aggregated configuration snapshot for the Telegram bot."""

    telegram: TelegramConfig
    store: StoreConfig
    display: DisplayConfig
    log_directory: str

    @property
    def timezone(self) -> str:
        return self.display.timezone

    @property
    def language(self) -> str:
        return self.display.language


def _build_config_from_settings(settings: AppSettings) -> BotAppConfig:
    """Translate :class:`AppSettings` values into runtime config objects."""
    t('botapp.config._build_config_from_settings')

    return BotAppConfig(
        telegram=TelegramConfig(
            token=settings.bot_token,
            production_mode=settings.production_mode,
        ),
        store=StoreConfig(
            backend=settings.store_backend,
            collection=settings.collection,
            timeout_seconds=settings.store_timeout_seconds,
            firestore_project=settings.firestore_project,
            firestore_credentials_file=settings.firestore_credentials_file,
        ),
        display=DisplayConfig(
            language=settings.display_language,
            timezone=settings.timezone,
            notification_seconds=settings.notification_seconds,
        ),
        log_directory=settings.log_directory,
    )


def load_bot_config(settings: Optional[AppSettings] = None) -> BotAppConfig:
    """Load the Telegram bot configuration from shared application settings."""
    t('botapp.config.load_bot_config')

    if settings is None:
        settings = get_settings()
    return _build_config_from_settings(settings)


__all__ = [
    'BotAppConfig',
    'DisplayConfig',
    'StoreConfig',
    'TelegramConfig',
    'load_bot_config',
]
