"""Chat-backed password prompt and alert used by the delete flow."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from telegram.error import TelegramError

from tracking import t

from bookings.models import Booking
from botapp.i18n.translator import Translator, create_translator
from botapp.ui.telegram_ui import TelegramUI


class TelegramSecretPrompt:
    """Ask for a booking's password in chat.

    :meth:`ask` sends the prompt and waits until the chat's next text message
    is routed to :meth:`answer`, or until :meth:`cancel` is called from the
    cancel button or ``/cancel``. The prompt message is removed afterwards.
    """

    def __init__(
        self,
        bot,
        chat_id: int,
        *,
        translator: Optional[Translator] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        t('botapp.prompts.TelegramSecretPrompt.__init__')
        self.bot = bot
        self.chat_id = chat_id
        self.translator = translator or create_translator()
        self.logger = logger or logging.getLogger('SecretPrompt')
        self._pending: Optional[asyncio.Future] = None

    @property
    def awaiting(self) -> bool:
        return self._pending is not None and not self._pending.done()

    async def ask(self, booking: Booking) -> Optional[str]:
        t('botapp.prompts.TelegramSecretPrompt.ask')
        if self.awaiting:
            raise RuntimeError("A password prompt is already open in this chat")

        self._pending = asyncio.get_running_loop().create_future()
        message = await self.bot.send_message(
            chat_id=self.chat_id,
            text=self.translator.t("delete.prompt", user_name=booking.user_name),
            reply_markup=TelegramUI.create_secret_cancel_keyboard(self.translator),
        )
        try:
            return await self._pending
        finally:
            self._pending = None
            try:
                await self.bot.delete_message(chat_id=self.chat_id, message_id=message.message_id)
            except TelegramError as exc:
                self.logger.debug("Prompt message already gone in chat %s: %s", self.chat_id, exc)

    def answer(self, text: str) -> bool:
        """Resolve the open prompt with ``text``; False when nothing is waiting."""

        t('botapp.prompts.TelegramSecretPrompt.answer')
        if not self.awaiting:
            return False
        self._pending.set_result(text)
        return True

    def cancel(self) -> bool:
        t('botapp.prompts.TelegramSecretPrompt.cancel')
        if not self.awaiting:
            return False
        self._pending.set_result(None)
        return True


class TelegramAlert:
    """Persistent warning message that stays until its OK button is pressed."""

    def __init__(self, bot, chat_id: int, *, translator: Optional[Translator] = None) -> None:
        t('botapp.prompts.TelegramAlert.__init__')
        self.bot = bot
        self.chat_id = chat_id
        self.translator = translator or create_translator()

    async def alert(self, message: str) -> None:
        t('botapp.prompts.TelegramAlert.alert')
        await self.bot.send_message(
            chat_id=self.chat_id,
            text=f"⚠️ {message}",
            reply_markup=TelegramUI.create_alert_keyboard(self.translator),
        )


__all__ = ["TelegramAlert", "TelegramSecretPrompt"]
