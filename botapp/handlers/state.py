"""Per-chat conversation state for the booking bot."""

from __future__ import annotations
from tracking import t

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, Iterator, List, Optional

from telegram import Update

from bookings.controller import DEFAULT_MESSAGES, InteractionController
from bookings.notifications import NotificationCenter
from bookings.store import BookingStore
from botapp.i18n import Translator
from botapp.notifications import TelegramNotificationPresenter
from botapp.prompts import TelegramAlert, TelegramSecretPrompt
from infrastructure import constants

VIEW_BOARD = "board"
VIEW_LIST = "list"


@dataclass
class OpenView:
    """A board or list message that follows the live snapshot."""

    kind: str
    message_id: int
    date: Optional[str] = None
    last_text: str = ""


@dataclass
class ChatSession:
    """Everything one chat needs to fill the form and delete bookings."""

    chat_id: int
    bot: object
    controller: InteractionController
    notifier: NotificationCenter
    prompt: TelegramSecretPrompt
    alert: TelegramAlert
    presenter: TelegramNotificationPresenter
    awaiting_field: Optional[str] = None
    view: Optional[OpenView] = None

    def close(self) -> None:
        t('botapp.handlers.state.ChatSession.close')
        self.prompt.cancel()
        self.presenter.detach()
        self.notifier.dismiss()


def translated_messages(translator: Translator) -> Dict[str, str]:
    """Controller notification texts in the display language."""
    t('botapp.handlers.state.translated_messages')
    return {key: translator.t(f"notif.{key}") for key in DEFAULT_MESSAGES}


class SessionRegistry:
    """Creates and keeps one :class:`ChatSession` per chat."""

    def __init__(
        self,
        store: BookingStore,
        translator: Translator,
        *,
        timezone: str = constants.DEFAULT_TIMEZONE,
        notification_seconds: float = constants.NOTIFICATION_DURATION_SECONDS,
        clock: Optional[Callable[[], datetime]] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        t('botapp.handlers.state.SessionRegistry.__init__')
        self.store = store
        self.translator = translator
        self.timezone = timezone
        self.notification_seconds = notification_seconds
        self.clock = clock
        self.logger = logger or logging.getLogger('SessionRegistry')
        self._sessions: Dict[int, ChatSession] = {}

    def get(self, chat_id: int) -> Optional[ChatSession]:
        return self._sessions.get(chat_id)

    def get_or_create(self, chat_id: int, bot) -> ChatSession:
        t('botapp.handlers.state.SessionRegistry.get_or_create')
        session = self._sessions.get(chat_id)
        if session is not None:
            return session

        notifier = NotificationCenter(duration=self.notification_seconds)
        prompt = TelegramSecretPrompt(bot, chat_id, translator=self.translator)
        alert = TelegramAlert(bot, chat_id, translator=self.translator)
        controller = InteractionController(
            self.store,
            notifier,
            prompt=prompt,
            alert=alert,
            clock=self.clock,
            timezone=self.timezone,
            messages=translated_messages(self.translator),
        )
        presenter = TelegramNotificationPresenter(bot, chat_id)
        presenter.attach(notifier)

        session = ChatSession(
            chat_id=chat_id,
            bot=bot,
            controller=controller,
            notifier=notifier,
            prompt=prompt,
            alert=alert,
            presenter=presenter,
        )
        self._sessions[chat_id] = session
        self.logger.debug("Created session for chat %s", chat_id)
        return session

    def for_update(self, update: Update, bot) -> Optional[ChatSession]:
        """Session for the update's chat, or ``None`` for chat-less updates."""

        t('botapp.handlers.state.SessionRegistry.for_update')
        chat = update.effective_chat
        if chat is None:
            return None
        return self.get_or_create(chat.id, bot)

    def chat_ids(self) -> List[int]:
        return list(self._sessions)

    def __iter__(self) -> Iterator[ChatSession]:
        return iter(list(self._sessions.values()))

    def __len__(self) -> int:
        return len(self._sessions)

    def close(self) -> None:
        t('botapp.handlers.state.SessionRegistry.close')
        for session in self:
            session.close()
        self._sessions.clear()


__all__ = [
    "ChatSession",
    "OpenView",
    "SessionRegistry",
    "VIEW_BOARD",
    "VIEW_LIST",
    "translated_messages",
]
