"""Unit tests for environment-driven settings and bot config."""
from tracking import t

import pytest

from botapp.config import load_bot_config
from infrastructure.settings import STORE_FIRESTORE, STORE_MEMORY, load_settings


def test_defaults_when_environment_is_empty():
    t('tests.unit.test_settings.test_defaults_when_environment_is_empty')
    settings = load_settings({})

    assert settings.bot_token == ""
    assert settings.production_mode is False
    assert settings.timezone == "Asia/Taipei"
    assert settings.display_language == "zh-TW"
    assert settings.store_backend == STORE_FIRESTORE
    assert settings.collection == "bookings"
    assert settings.store_timeout_seconds == 10.0
    assert settings.notification_seconds == 4.0
    assert settings.firestore_project is None


def test_values_are_read_from_environment():
    t('tests.unit.test_settings.test_values_are_read_from_environment')
    settings = load_settings({
        "TELEGRAM_BOT_TOKEN": "123:abc",
        "PRODUCTION_MODE": "true",
        "BOOKING_STORE": " Memory ",
        "BOOKING_COLLECTION": "staging-bookings",
        "STORE_TIMEOUT_SECONDS": "2.5",
        "NOTIFICATION_SECONDS": "-1",
        "DISPLAY_LANGUAGE": "en",
    })

    assert settings.bot_token == "123:abc"
    assert settings.production_mode is True
    assert settings.store_backend == STORE_MEMORY
    assert settings.collection == "staging-bookings"
    assert settings.store_timeout_seconds == 2.5
    # Non-positive durations fall back to the default
    assert settings.notification_seconds == 4.0
    assert settings.display_language == "en"


def test_unknown_store_backend_is_rejected():
    t('tests.unit.test_settings.test_unknown_store_backend_is_rejected')
    with pytest.raises(ValueError):
        load_settings({"BOOKING_STORE": "sqlite"})


def test_bot_config_groups_settings():
    t('tests.unit.test_settings.test_bot_config_groups_settings')
    config = load_bot_config(load_settings({"BOOKING_STORE": "memory", "BOT_TIMEZONE": "UTC"}))

    assert config.store.backend == STORE_MEMORY
    assert config.timezone == "UTC"
    assert config.language == "zh-TW"
    assert config.display.notification_seconds == 4.0
    assert config.log_directory == "logs"
