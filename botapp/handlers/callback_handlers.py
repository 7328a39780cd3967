"""Callback dispatcher wiring domain handlers and router."""

from __future__ import annotations
from tracking import t

import logging
from datetime import datetime
from typing import Callable, Optional

from telegram import Update
from telegram.error import TelegramError
from telegram.ext import ContextTypes

from bookings.store import BookingStore
from botapp.handlers.board.handler import BoardHandler
from botapp.handlers.booking.handler import BookingHandler
from botapp.handlers.dependencies import CallbackDependencies
from botapp.handlers.router import CallbackRouter
from botapp.handlers.state import SessionRegistry
from botapp.i18n import Translator
from botapp.ui import constants as cb


class CallbackHandler:
    """Main entrypoint invoked by Telegram callback queries and text messages."""

    def __init__(
        self,
        store: BookingStore,
        sessions: SessionRegistry,
        translator: Translator,
        *,
        timezone: str,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        t('botapp.handlers.callback_handlers.CallbackHandler.__init__')
        self.logger = logging.getLogger('CallbackHandler')

        self.deps = CallbackDependencies(
            logger=self.logger,
            store=store,
            sessions=sessions,
            translator=translator,
            timezone=timezone,
            clock=clock,
        )

        self.booking = BookingHandler(self.deps)
        self.board = BoardHandler(self.deps)

        self.router = CallbackRouter(self.booking.handle_unknown_callback)
        self._register_routes()

    def _register_routes(self) -> None:
        """Register exact and prefix routes with the router."""
        t('botapp.handlers.callback_handlers.CallbackHandler._register_routes')

        add = self.router.add_exact
        add(cb.MENU_MAIN, self.booking.handle_back_to_menu)
        add(cb.MENU_NEW_BOOKING, self.booking.handle_new_booking)
        add(cb.FORM_SUBMIT, self.booking.handle_submit)
        add(cb.FORM_RETIME, self.booking.handle_retime)
        add(cb.FORM_CANCEL, self.booking.handle_cancel)

        add(cb.MENU_BOARD, self.board.handle_board_menu)
        add(cb.MENU_LIST, self.board.handle_list)
        add(cb.SECRET_CANCEL, self.board.handle_secret_cancel)
        add(cb.ALERT_ACK, self.board.handle_alert_ack)

        # Prefix-based routes
        self.router.add_prefix(cb.PREFIX_EQUIPMENT, self.booking.handle_equipment_selection)
        self.router.add_prefix(cb.PREFIX_FORM_DATE, self.booking.handle_date_selection)
        self.router.add_prefix(cb.PREFIX_START, self.booking.handle_start_selection)
        self.router.add_prefix(cb.PREFIX_END, self.booking.handle_end_selection)
        self.router.add_prefix(cb.PREFIX_BOARD, self.board.handle_board_date)
        self.router.add_prefix(cb.PREFIX_DELETE, self.board.handle_delete)

    async def handle_callback(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Answer query and delegate to the registered handler."""

        t('botapp.handlers.callback_handlers.CallbackHandler.handle_callback')
        query = update.callback_query
        if query:
            try:
                await query.answer()
            except TelegramError as exc:
                self.logger.warning("Failed to answer callback query: %s", exc)

            self.logger.info(
                "Received callback %s from user %s",
                query.data,
                update.effective_user.id if update.effective_user else 'Unknown',
            )

        await self.router.dispatch(update, context)

    async def handle_text(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        t('botapp.handlers.callback_handlers.CallbackHandler.handle_text')
        await self.booking.handle_text(update, context)

    async def refresh_views(self) -> int:
        t('botapp.handlers.callback_handlers.CallbackHandler.refresh_views')
        return await self.board.refresh_views()


__all__ = ["CallbackHandler"]
