"""
Handlers package for telegram bot
Contains modular handler classes for different bot functionalities
"""

from .callback_handlers import CallbackHandler

__all__ = ['CallbackHandler']