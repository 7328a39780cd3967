"""
Centralized Error Handling for the Booking Bot
Turns exceptions that escape a handler into a log entry and a short chat reply
"""
from tracking import t

import logging
from typing import Optional

from telegram import Update
from telegram.error import TelegramError
from telegram.ext import ContextTypes

from bookings.errors import BookingError, ConnectivityError
from botapp.i18n import Translator, create_translator
from botapp.ui.telegram_ui import TelegramUI


class ErrorHandler:
    """
    Centralized error handling for the booking bot

    Provides static methods for handling different types of errors
    with appropriate user messaging and logging
    """

    @staticmethod
    def is_benign(error: BaseException) -> bool:
        """True for Telegram complaints that need no user-facing reply."""
        t('botapp.error_handler.ErrorHandler.is_benign')
        return "message is not modified" in str(error).lower()

    @staticmethod
    async def handle_telegram_error(
        update: Optional[Update],
        context: ContextTypes.DEFAULT_TYPE,
        error: BaseException,
        translator: Optional[Translator] = None,
    ) -> None:
        """
        Main entry point for handling errors that occur during Telegram updates

        Logs error details and sends a generic, user-friendly message with a
        way back to the menu.

        Args:
            update: The telegram update that caused the error (may be None)
            context: The callback context
            error: The exception that occurred
            translator: Display translator, default language if None

        Returns:
            None
        """
        t('botapp.error_handler.ErrorHandler.handle_telegram_error')
        logger = logging.getLogger('ErrorHandler')
        tr = translator or create_translator()

        if ErrorHandler.is_benign(error):
            # Users double-tapping a button
            logger.warning("Telegram message not modified: %s", error)
            return

        if isinstance(error, ConnectivityError):
            logger.error("Booking store unavailable: %s", error)
        elif isinstance(error, BookingError):
            logger.error("Unhandled booking error: %s: %s", type(error).__name__, error)
        else:
            logger.error("Telegram error occurred: %s: %s", type(error).__name__, error, exc_info=error)

        if not isinstance(update, Update):
            logger.warning("No update object available - cannot send error message to user")
            return

        if update.effective_user:
            logger.error("Error context - User ID: %s", update.effective_user.id)

        chat = update.effective_chat
        if chat is None:
            logger.warning("Unable to send error message - no chat available")
            return

        try:
            await context.bot.send_message(
                chat_id=chat.id,
                text=tr.t("error.unexpected"),
                reply_markup=TelegramUI.create_back_to_menu_keyboard(tr),
            )
        except TelegramError as send_error:
            logger.error("Failed to send error message to user: %s", send_error)


__all__ = ["ErrorHandler"]
