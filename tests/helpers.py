"""Shared fakes and utilities for unit tests."""

from __future__ import annotations
from tracking import t

import itertools
import types
from typing import Any, Dict, List, Optional, Tuple

from bookings.models import Booking, FormDraft


class DummyLogger:
    """Lightweight stand-in for ``logging.Logger`` that records calls."""

    def __init__(self) -> None:
        t('tests.helpers.DummyLogger.__init__')
        self.records: List[Tuple[str, Tuple[Any, ...], Dict[str, Any]]] = []

    def _record(self, level: str, *args: Any, **kwargs: Any) -> None:
        self.records.append((level, args, kwargs))

    def debug(self, *args: Any, **kwargs: Any) -> None:
        self._record("debug", *args, **kwargs)

    def info(self, *args: Any, **kwargs: Any) -> None:
        self._record("info", *args, **kwargs)

    def warning(self, *args: Any, **kwargs: Any) -> None:
        self._record("warning", *args, **kwargs)

    def error(self, *args: Any, **kwargs: Any) -> None:
        self._record("error", *args, **kwargs)

    @property
    def messages(self) -> List[Tuple[str, str]]:
        """Return ``(level, formatted message)`` pairs for quick assertions."""
        t('tests.helpers.DummyLogger.messages')

        formatted: List[Tuple[str, str]] = []
        for level, args, _ in self.records:
            if not args:
                continue
            template = args[0]
            try:
                message = template % args[1:] if len(args) > 1 else template
            except (TypeError, ValueError):
                message = template
            formatted.append((level, str(message)))
        return formatted

    def levels(self) -> List[str]:
        return [level for level, _, _ in self.records]


def make_booking(
    booking_id: str = "b1",
    *,
    user_name: str = "Alice",
    equipment_id: str = "projector",
    date: str = "2025-06-01",
    start_time: str = "09:00",
    end_time: str = "10:00",
    password: str = "pw",
) -> Booking:
    t('tests.helpers.make_booking')
    return Booking(
        id=booking_id,
        user_name=user_name,
        equipment_id=equipment_id,
        date=date,
        start_time=start_time,
        end_time=end_time,
        password=password,
        created_at="2025-05-30T08:00:00+00:00",
    )


def make_draft(**overrides: Any) -> FormDraft:
    t('tests.helpers.make_draft')
    values = dict(
        user_name="Bob",
        equipment_id="projector",
        date="2025-06-01",
        start_time="09:00",
        end_time="10:00",
        password="secret",
    )
    values.update(overrides)
    return FormDraft(**values)


def booking_document(booking: Booking) -> Dict[str, str]:
    """Stored form of ``booking`` for seeding an in-memory backend."""
    t('tests.helpers.booking_document')
    return booking.to_document()


class ScriptedPrompt:
    """Secret prompt that returns queued answers (``None`` means cancelled)."""

    def __init__(self, *answers: Optional[str]) -> None:
        t('tests.helpers.ScriptedPrompt.__init__')
        self.answers = list(answers)
        self.asked: List[Booking] = []

    async def ask(self, booking: Booking) -> Optional[str]:
        t('tests.helpers.ScriptedPrompt.ask')
        self.asked.append(booking)
        return self.answers.pop(0) if self.answers else None


class RecordingAlert:
    def __init__(self) -> None:
        t('tests.helpers.RecordingAlert.__init__')
        self.messages: List[str] = []

    async def alert(self, message: str) -> None:
        t('tests.helpers.RecordingAlert.alert')
        self.messages.append(message)


# ----------------------------------------------------------------------
# Telegram fakes
class FakeMessage:
    def __init__(self, message_id: int, chat_id: int, text: str = "", bot: "FakeBot" = None) -> None:
        t('tests.helpers.FakeMessage.__init__')
        self.message_id = message_id
        self.chat_id = chat_id
        self.text = text
        self.bot = bot
        self.deleted = False

    async def delete(self) -> bool:
        t('tests.helpers.FakeMessage.delete')
        self.deleted = True
        if self.bot is not None:
            self.bot.deleted.append((self.chat_id, self.message_id))
        return True


class FakeBot:
    """Records sent, edited and deleted messages."""

    def __init__(self) -> None:
        t('tests.helpers.FakeBot.__init__')
        self._ids = itertools.count(100)
        self.sent: List[Dict[str, Any]] = []
        self.edited: List[Dict[str, Any]] = []
        self.deleted: List[Tuple[int, int]] = []

    async def send_message(self, chat_id: int, text: str, **kwargs: Any) -> FakeMessage:
        t('tests.helpers.FakeBot.send_message')
        message = FakeMessage(next(self._ids), chat_id, text, bot=self)
        self.sent.append({"chat_id": chat_id, "text": text, "message_id": message.message_id, **kwargs})
        return message

    async def edit_message_text(self, text: str, chat_id: int, message_id: int, **kwargs: Any) -> None:
        t('tests.helpers.FakeBot.edit_message_text')
        self.edited.append({"chat_id": chat_id, "message_id": message_id, "text": text, **kwargs})

    async def delete_message(self, chat_id: int, message_id: int) -> bool:
        t('tests.helpers.FakeBot.delete_message')
        self.deleted.append((chat_id, message_id))
        return True

    def texts(self) -> List[str]:
        return [entry["text"] for entry in self.sent]


class DummyQuery:
    def __init__(self, data: str, message: FakeMessage, user_id: int = 1) -> None:
        t('tests.helpers.DummyQuery.__init__')
        self.data = data
        self.message = message
        self.from_user = types.SimpleNamespace(id=user_id)
        self.edits: List[Tuple[str, Dict[str, Any]]] = []
        self.answered = False

    async def answer(self, text: Optional[str] = None) -> None:
        t('tests.helpers.DummyQuery.answer')
        self.answered = True

    async def edit_message_text(self, text: str, **kwargs: Any) -> None:
        t('tests.helpers.DummyQuery.edit_message_text')
        self.edits.append((text, kwargs))


class DummyUpdate:
    """Just enough of ``telegram.Update`` for the handlers."""

    def __init__(self, *, data: Optional[str] = None, text: Optional[str] = None,
                 chat_id: int = 42, bot: Optional[FakeBot] = None) -> None:
        t('tests.helpers.DummyUpdate.__init__')
        self.effective_chat = types.SimpleNamespace(id=chat_id)
        self.effective_user = types.SimpleNamespace(id=chat_id)
        self.callback_query = None
        self.message = None
        if data is not None:
            self.callback_query = DummyQuery(data, FakeMessage(7, chat_id, bot=bot))
        if text is not None:
            self.message = FakeMessage(8, chat_id, text, bot=bot)

    @property
    def effective_message(self) -> Optional[FakeMessage]:
        if self.message is not None:
            return self.message
        return self.callback_query.message if self.callback_query else None


class DummyContext:
    def __init__(self, bot: FakeBot) -> None:
        t('tests.helpers.DummyContext.__init__')
        self.bot = bot
        self.user_data: Dict[str, Any] = {}
        self.error: Optional[BaseException] = None
