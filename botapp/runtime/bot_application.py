"""Telegram bot runtime application wiring."""

from __future__ import annotations
from tracking import t

import logging
from typing import Any, Dict, Optional

from telegram import Update
from telegram.ext import Application, ContextTypes

from bookings.schedule import count_bookings
from botapp.bootstrap.container import DependencyContainer
from botapp.commands import register_core_handlers
from botapp.config import BotAppConfig, load_bot_config
from botapp.error_handler import ErrorHandler
from botapp.runtime.lifecycle import LifecycleManager
from botapp.ui.telegram_ui import TelegramUI


class BotApplication:
    """Assemble dependencies and handlers for the Telegram bot runtime."""

    def __init__(
        self,
        config: Optional[BotAppConfig] = None,
        *,
        overrides: Optional[Dict[str, Any]] = None,
    ) -> None:
        t('botapp.runtime.bot_application.BotApplication.__init__')
        self.logger = logging.getLogger('BookingBot')
        self.config = config or load_bot_config()
        self.token = self.config.telegram.token
        self.container = DependencyContainer(self.config, overrides)
        dependencies = self.container.build_dependencies()

        self.translator = dependencies.translator
        self.store = dependencies.store
        self.sessions = dependencies.sessions
        self.callback_handler = dependencies.callback_handler
        self.lifecycle = LifecycleManager(dependencies, logger=logging.getLogger('LifecycleManager'))
        self.application = None

    async def start_command(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        """Handle /start: open a session for the chat and show the menu."""
        t('botapp.runtime.bot_application.BotApplication.start_command')

        session = self.sessions.for_update(update, context.bot)
        if session is None:
            return
        session.view = None
        await context.bot.send_message(
            chat_id=session.chat_id,
            text=TelegramUI.format_main_menu_message(self.translator),
            parse_mode='MarkdownV2',
            reply_markup=TelegramUI.create_main_menu_keyboard(count_bookings(self.store.snapshot), self.translator),
        )

    async def cancel_command(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        """Handle /cancel: abandon an open password prompt, else the form."""
        t('botapp.runtime.bot_application.BotApplication.cancel_command')

        session = self.sessions.for_update(update, context.bot)
        if session is None:
            return
        if session.prompt.cancel():
            return

        self.callback_handler.booking.cancel_form(session)
        await context.bot.send_message(
            chat_id=session.chat_id,
            text=TelegramUI.format_main_menu_message(
                self.translator, notice=self.translator.t("form.cancelled")
            ),
            parse_mode='MarkdownV2',
            reply_markup=TelegramUI.create_main_menu_keyboard(count_bookings(self.store.snapshot), self.translator),
        )

    async def error_handler(self, update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Central error handler for Telegram exceptions."""
        t('botapp.runtime.bot_application.BotApplication.error_handler')
        await ErrorHandler.handle_telegram_error(update, context, context.error, self.translator)

    def build_application(self) -> Application:
        """Build the PTB application.

        Updates are processed concurrently: a delete waits on the password
        prompt, and the reply that answers it is a separate update.
        """
        t('botapp.runtime.bot_application.BotApplication.build_application')

        app = (
            Application.builder()
            .token(self.token)
            .concurrent_updates(True)
            .post_init(self._post_init)
            .post_stop(self._post_stop)
            .build()
        )
        register_core_handlers(app, self)
        self.application = app
        return app

    def run(self) -> None:
        """Run the Telegram bot with long polling."""
        t('botapp.runtime.bot_application.BotApplication.run')

        if not self.token:
            raise ValueError("TELEGRAM_BOT_TOKEN is not configured")

        app = self.build_application()
        self.logger.info("Starting async bot...")
        app.run_polling(allowed_updates=Update.ALL_TYPES)

    async def _post_init(self, application) -> None:
        """Initialize async components after the Telegram app starts."""
        t('botapp.runtime.bot_application.BotApplication._post_init')
        self.application = application
        await self.lifecycle.post_init(application)

    async def _post_stop(self, application) -> None:
        """Clean up async components after the Telegram app stops."""
        t('botapp.runtime.bot_application.BotApplication._post_stop')
        await self.lifecycle.post_stop(application)
        self.application = None


__all__ = ['BotApplication']
