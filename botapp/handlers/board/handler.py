"""Board, list and password-gated delete handlers."""

from __future__ import annotations
from tracking import t

from typing import Optional, Tuple

from telegram import InlineKeyboardMarkup, Update
from telegram.constants import ParseMode
from telegram.error import BadRequest, TelegramError
from telegram.ext import ContextTypes

from bookings.controller import DeleteOutcome
from bookings.schedule import board_for
from bookings.time_utils import parse_iso_date
from botapp.handlers.dependencies import CallbackDependencies
from botapp.handlers.mixins import CallbackResponseMixin
from botapp.handlers.router import callback_payload
from botapp.handlers.state import VIEW_BOARD, VIEW_LIST, ChatSession, OpenView
from botapp.ui import constants as cb
from botapp.ui.telegram_ui import TelegramUI
from botapp.ui.text_blocks import escape_telegram_markdown


class BoardHandler(CallbackResponseMixin):
    """Shows the live board and list, and runs deletes from their buttons.

    An open board or list message is remembered per chat and re-rendered
    whenever the store publishes a new snapshot.
    """

    def __init__(self, deps: CallbackDependencies) -> None:
        t('botapp.handlers.board.handler.BoardHandler.__init__')
        self.deps = deps
        self.logger = deps.logger
        self.tr = deps.translator

    def _session(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> ChatSession:
        return self.deps.sessions.for_update(update, context.bot)

    # ------------------------------------------------------------------
    # Rendering
    def render_view(self, view: OpenView) -> Tuple[str, InlineKeyboardMarkup]:
        """Text and keyboard for ``view`` from the current snapshot."""

        t('botapp.handlers.board.handler.BoardHandler.render_view')
        store = self.deps.store
        loaded = store.loaded
        sync_lost = store.sync_error is not None
        snapshot = store.snapshot

        if view.kind == VIEW_BOARD:
            board = board_for(view.date, snapshot)
            text = TelegramUI.format_board_message(view.date, board, self.tr, loaded=loaded, sync_lost=sync_lost)
            return text, TelegramUI.create_board_keyboard(view.date, board, self.tr)

        text = TelegramUI.format_bookings_list(snapshot, self.tr, loaded=loaded, sync_lost=sync_lost)
        return text, TelegramUI.create_list_keyboard(snapshot, self.tr)

    async def _open_view(self, update: Update, session: ChatSession, kind: str, date: Optional[str] = None) -> None:
        query = update.callback_query
        view = OpenView(kind=kind, message_id=query.message.message_id, date=date)
        text, markup = self.render_view(view)
        view.last_text = text
        session.view = view
        await self._edit_callback_message(query, text, reply_markup=markup)

    async def refresh_views(self) -> int:
        """Re-render every open view whose text changed; returns how many were edited."""

        t('botapp.handlers.board.handler.BoardHandler.refresh_views')
        edited = 0
        for session in self.deps.sessions:
            view = session.view
            if view is None:
                continue
            text, markup = self.render_view(view)
            if text == view.last_text:
                continue
            view.last_text = text
            try:
                await session.bot.edit_message_text(
                    text=text,
                    chat_id=session.chat_id,
                    message_id=view.message_id,
                    reply_markup=markup,
                    parse_mode=ParseMode.MARKDOWN_V2,
                )
            except BadRequest as exc:
                if "message is not modified" not in str(exc).lower():
                    self.logger.info("Dropping stale view in chat %s: %s", session.chat_id, exc)
                    session.view = None
                continue
            except TelegramError as exc:
                self.logger.warning("Could not refresh view in chat %s: %s", session.chat_id, exc)
                continue
            edited += 1
        return edited

    # ------------------------------------------------------------------
    # Views
    async def handle_board_menu(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        t('botapp.handlers.board.handler.BoardHandler.handle_board_menu')
        session = self._session(update, context)
        session.view = None
        await self._edit_callback_message(
            update.callback_query,
            escape_telegram_markdown(self.tr.t("board.pick_date")),
            reply_markup=TelegramUI.create_board_date_keyboard(self.deps.today(), self.tr),
        )

    async def handle_board_date(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        t('botapp.handlers.board.handler.BoardHandler.handle_board_date')
        value = callback_payload(update, cb.PREFIX_BOARD)
        try:
            parse_iso_date(value or "")
        except ValueError:
            self.logger.warning("Ignoring malformed board date %r", value)
            return
        await self._open_view(update, self._session(update, context), VIEW_BOARD, value)

    async def handle_list(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        t('botapp.handlers.board.handler.BoardHandler.handle_list')
        await self._open_view(update, self._session(update, context), VIEW_LIST)

    # ------------------------------------------------------------------
    # Delete flow
    async def handle_delete(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> Optional[DeleteOutcome]:
        """Run the password-gated delete for the pressed booking.

        The password prompt waits on a later update, so the application
        must process updates concurrently.
        """

        t('botapp.handlers.board.handler.BoardHandler.handle_delete')
        booking_id = callback_payload(update, cb.PREFIX_DELETE)
        if booking_id is None:
            return None
        session = self._session(update, context)
        outcome = await session.controller.request_delete(booking_id)
        self.logger.info("Delete of %s in chat %s finished: %s", booking_id, session.chat_id, outcome.value)
        if outcome is DeleteOutcome.ABSENT:
            await self.refresh_views()
        return outcome

    async def handle_secret_cancel(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        t('botapp.handlers.board.handler.BoardHandler.handle_secret_cancel')
        session = self._session(update, context)
        if not session.prompt.cancel():
            # Stale prompt left from an earlier run
            await self._delete_message_safe(update.callback_query.message)

    async def handle_alert_ack(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        t('botapp.handlers.board.handler.BoardHandler.handle_alert_ack')
        await self._delete_message_safe(update.callback_query.message)


__all__ = ["BoardHandler"]
