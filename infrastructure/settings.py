"""Centralized application settings.

All runtime configuration is read here once, from the environment (and a
``.env`` file during development), so the rest of the code receives plain
values instead of calling ``os.getenv`` itself.
"""

from __future__ import annotations
from tracking import t

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Mapping, Optional

from dotenv import load_dotenv

from . import constants as app_constants

STORE_FIRESTORE = "firestore"
STORE_MEMORY = "memory"
SUPPORTED_STORES = {STORE_FIRESTORE, STORE_MEMORY}


def _to_bool(value: Optional[str], default: bool = False) -> bool:
    """Normalize environment strings such as "true"/"1" into booleans."""
    t('infrastructure.settings._to_bool')

    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _to_float(value: Optional[str], default: float) -> float:
    t('infrastructure.settings._to_float')

    if value is None or not value.strip():
        return default
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return default
    return parsed if parsed > 0 else default


@dataclass(frozen=True)
class AppSettings:
    """Immutable snapshot of high-level configuration values."""

    bot_token: str
    production_mode: bool
    timezone: str
    display_language: str
    store_backend: str
    firestore_project: Optional[str]
    firestore_credentials_file: Optional[str]
    collection: str
    store_timeout_seconds: float
    notification_seconds: float
    log_directory: str


def load_settings(env: Optional[Mapping[str, str]] = None) -> AppSettings:
    """Load configuration from the environment and fall back to defaults."""
    t('infrastructure.settings.load_settings')

    if env is None:
        load_dotenv(override=False)
        env = os.environ

    store_backend = env.get("BOOKING_STORE", STORE_FIRESTORE).strip().lower()
    if store_backend not in SUPPORTED_STORES:
        raise ValueError(
            f"Unsupported BOOKING_STORE {store_backend!r}; "
            f"expected one of {sorted(SUPPORTED_STORES)}"
        )

    return AppSettings(
        bot_token=env.get("TELEGRAM_BOT_TOKEN", ""),
        production_mode=_to_bool(env.get("PRODUCTION_MODE", "false")),
        timezone=env.get("BOT_TIMEZONE", app_constants.DEFAULT_TIMEZONE),
        display_language=env.get("DISPLAY_LANGUAGE", app_constants.DEFAULT_DISPLAY_LANGUAGE),
        store_backend=store_backend,
        firestore_project=env.get("FIRESTORE_PROJECT") or None,
        firestore_credentials_file=env.get("FIRESTORE_CREDENTIALS_FILE") or None,
        collection=env.get("BOOKING_COLLECTION", app_constants.DEFAULT_COLLECTION),
        store_timeout_seconds=_to_float(
            env.get("STORE_TIMEOUT_SECONDS"),
            app_constants.DEFAULT_STORE_TIMEOUT_SECONDS,
        ),
        notification_seconds=_to_float(
            env.get("NOTIFICATION_SECONDS"),
            app_constants.NOTIFICATION_DURATION_SECONDS,
        ),
        log_directory=env.get("LOG_DIRECTORY", "logs"),
    )


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """Return a cached :class:`AppSettings` instance."""
    t('infrastructure.settings.get_settings')

    return load_settings()
