"""Command and handler registration for the Telegram application."""

from .handlers import register_core_handlers

__all__ = ['register_core_handlers']
