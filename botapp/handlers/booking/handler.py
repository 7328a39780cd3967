"""Booking form callback and text handlers."""

from __future__ import annotations
from tracking import t

from telegram import Update
from telegram.ext import ContextTypes

from bookings.models import get_equipment
from bookings.schedule import count_bookings
from bookings.time_utils import is_grid_time, parse_iso_date
from bookings.validation import FIELD_PASSWORD, FIELD_USER_NAME, validate
from botapp.handlers.dependencies import CallbackDependencies
from botapp.handlers.mixins import CallbackResponseMixin
from botapp.handlers.router import callback_payload
from botapp.handlers.state import ChatSession
from botapp.ui import constants as cb
from botapp.ui.telegram_ui import TelegramUI
from botapp.ui.text_blocks import escape_telegram_markdown
from infrastructure import constants


class BookingHandler(CallbackResponseMixin):
    """Walks a chat through the booking form.

    Name and password are typed; equipment, date and times are picked from
    keyboards; the summary step submits through the session's controller.
    """

    def __init__(self, deps: CallbackDependencies) -> None:
        t('botapp.handlers.booking.handler.BookingHandler.__init__')
        self.deps = deps
        self.logger = deps.logger
        self.tr = deps.translator

    def _session(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> ChatSession:
        return self.deps.sessions.for_update(update, context.bot)

    def _text(self, key: str, **params) -> str:
        return escape_telegram_markdown(self.tr.t(key, **params))

    # ------------------------------------------------------------------
    # Menu
    async def handle_back_to_menu(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        t('botapp.handlers.booking.handler.BookingHandler.handle_back_to_menu')
        session = self._session(update, context)
        session.view = None
        await self._edit_callback_message(
            update.callback_query,
            TelegramUI.format_main_menu_message(self.tr),
            reply_markup=TelegramUI.create_main_menu_keyboard(count_bookings(self.deps.store.snapshot), self.tr),
        )

    async def handle_unknown_callback(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        t('botapp.handlers.booking.handler.BookingHandler.handle_unknown_callback')
        query = update.callback_query
        self.logger.warning("Unknown callback data: %s", query.data if query else None)
        if query is not None:
            await self.handle_back_to_menu(update, context)

    # ------------------------------------------------------------------
    # Typed fields
    async def handle_new_booking(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Start a fresh draft and ask for the name."""

        t('botapp.handlers.booking.handler.BookingHandler.handle_new_booking')
        session = self._session(update, context)
        session.controller.reset_draft()
        session.awaiting_field = FIELD_USER_NAME
        session.view = None
        await self._edit_callback_message(
            update.callback_query,
            self._text("form.ask_name"),
            reply_markup=TelegramUI.create_form_cancel_keyboard(self.tr),
        )

    async def handle_text(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Route typed text to the open password prompt or the awaited form field."""

        t('botapp.handlers.booking.handler.BookingHandler.handle_text')
        message = update.effective_message
        session = self._session(update, context)
        if message is None or session is None:
            return
        text = message.text or ""

        if session.prompt.awaiting:
            session.prompt.answer(text)
            await self._delete_message_safe(message)
            return

        if session.awaiting_field == FIELD_USER_NAME:
            if not text.strip():
                await self._send(context.bot, session.chat_id, self._text("form.error.user_name"),
                                 reply_markup=TelegramUI.create_form_cancel_keyboard(self.tr))
                return
            session.controller.update_field(FIELD_USER_NAME, text.strip())
            session.awaiting_field = FIELD_PASSWORD
            await self._send(context.bot, session.chat_id, self._text("form.ask_password"),
                             reply_markup=TelegramUI.create_form_cancel_keyboard(self.tr))
            return

        if session.awaiting_field == FIELD_PASSWORD:
            # Kept exactly as typed; the chat copy is removed
            await self._delete_message_safe(message)
            if not text or len(text) > constants.PASSWORD_MAX_LENGTH:
                error_key = "form.error.password_length" if text else "form.error.password"
                await self._send(context.bot, session.chat_id,
                                 self._text(error_key, max_length=constants.PASSWORD_MAX_LENGTH),
                                 reply_markup=TelegramUI.create_form_cancel_keyboard(self.tr))
                return
            session.controller.update_field(FIELD_PASSWORD, text)
            session.awaiting_field = None
            await self._send(context.bot, session.chat_id, self._text("form.ask_equipment"),
                             reply_markup=TelegramUI.create_equipment_keyboard(self.tr))
            return

        await self._send(
            context.bot,
            session.chat_id,
            TelegramUI.format_main_menu_message(self.tr),
            reply_markup=TelegramUI.create_main_menu_keyboard(count_bookings(self.deps.store.snapshot), self.tr),
        )

    # ------------------------------------------------------------------
    # Picked fields
    async def handle_equipment_selection(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        t('botapp.handlers.booking.handler.BookingHandler.handle_equipment_selection')
        equipment_id = callback_payload(update, cb.PREFIX_EQUIPMENT)
        if get_equipment(equipment_id) is None:
            self.logger.warning("Ignoring unknown equipment %r", equipment_id)
            return
        session = self._session(update, context)
        session.controller.update_field("equipment_id", equipment_id)
        await self._edit_callback_message(
            update.callback_query,
            self._text("form.ask_date"),
            reply_markup=TelegramUI.create_form_date_keyboard(self.deps.today(), self.tr),
        )

    async def handle_date_selection(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        t('botapp.handlers.booking.handler.BookingHandler.handle_date_selection')
        value = callback_payload(update, cb.PREFIX_FORM_DATE)
        try:
            parse_iso_date(value or "")
        except ValueError:
            self.logger.warning("Ignoring malformed form date %r", value)
            return
        session = self._session(update, context)
        session.controller.update_field("date", value)
        await self._show_start_times(update, session)

    async def handle_retime(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        t('botapp.handlers.booking.handler.BookingHandler.handle_retime')
        await self._show_start_times(update, self._session(update, context))

    async def _show_start_times(self, update: Update, session: ChatSession) -> None:
        await self._edit_callback_message(
            update.callback_query,
            self._text("form.ask_start"),
            reply_markup=TelegramUI.create_start_time_keyboard(session.controller.draft.start_time, self.tr),
        )

    async def handle_start_selection(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        t('botapp.handlers.booking.handler.BookingHandler.handle_start_selection')
        value = callback_payload(update, cb.PREFIX_START)
        if not is_grid_time(value):
            self.logger.warning("Ignoring off-grid start time %r", value)
            return
        session = self._session(update, context)
        session.controller.update_field("start_time", value)
        await self._edit_callback_message(
            update.callback_query,
            self._text("form.ask_end"),
            reply_markup=TelegramUI.create_end_time_keyboard(value, session.controller.draft.end_time, self.tr),
        )

    async def handle_end_selection(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        t('botapp.handlers.booking.handler.BookingHandler.handle_end_selection')
        value = callback_payload(update, cb.PREFIX_END)
        if not is_grid_time(value):
            self.logger.warning("Ignoring off-grid end time %r", value)
            return
        session = self._session(update, context)
        session.controller.update_field("end_time", value)
        await self._show_summary(update, session, preview=True)

    async def _show_summary(self, update: Update, session: ChatSession, *, preview: bool) -> None:
        draft = session.controller.draft
        errors = validate(draft, self.deps.store.snapshot) if preview else session.controller.errors
        await self._edit_callback_message(
            update.callback_query,
            TelegramUI.format_form_summary(draft, errors, self.tr),
            reply_markup=TelegramUI.create_summary_keyboard(bool(errors), self.tr),
        )

    # ------------------------------------------------------------------
    # Submit / cancel
    async def handle_submit(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        t('botapp.handlers.booking.handler.BookingHandler.handle_submit')
        session = self._session(update, context)
        if session.controller.submitting:
            # Double tap; the first submit edits the message when it finishes
            return
        if await session.controller.submit():
            session.awaiting_field = None
            await self._edit_callback_message(
                update.callback_query,
                TelegramUI.format_main_menu_message(self.tr, notice=self.tr.t("form.submitted")),
                reply_markup=TelegramUI.create_main_menu_keyboard(count_bookings(self.deps.store.snapshot), self.tr),
            )
            return
        await self._show_summary(update, session, preview=False)

    async def handle_cancel(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        t('botapp.handlers.booking.handler.BookingHandler.handle_cancel')
        session = self._session(update, context)
        self.cancel_form(session)
        await self._edit_callback_message(
            update.callback_query,
            TelegramUI.format_main_menu_message(self.tr, notice=self.tr.t("form.cancelled")),
            reply_markup=TelegramUI.create_main_menu_keyboard(count_bookings(self.deps.store.snapshot), self.tr),
        )

    def cancel_form(self, session: ChatSession) -> None:
        t('botapp.handlers.booking.handler.BookingHandler.cancel_form')
        session.controller.reset_draft()
        session.awaiting_field = None


__all__ = ["BookingHandler"]
