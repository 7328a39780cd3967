"""Telegram application layer with lazy exports to avoid heavy imports."""
from tracking import t

__all__ = ["BookingBot", "BotApplication"]


def __getattr__(name):
    t('botapp.__getattr__')
    if name == "BookingBot":
        from .app import BookingBot as _BookingBot

        return _BookingBot
    if name == "BotApplication":
        from .runtime.bot_application import BotApplication as _BotApplication

        return _BotApplication
    raise AttributeError(f"module 'botapp' has no attribute {name!r}")
