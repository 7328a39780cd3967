"""Shared mixins for handler utilities."""

from __future__ import annotations
from tracking import t

import asyncio
from typing import Any, Optional

from telegram import Message
from telegram.constants import ParseMode
from telegram.error import BadRequest, RetryAfter, TelegramError


class CallbackResponseMixin:
    """Helpers for editing, sending and deleting chat messages.

    Expects ``self.logger``.
    """

    async def _edit_callback_message(self, query, text: str, *, retries: int = 1, **kwargs: Any) -> None:
        """Edit the callback's message, retrying once on rate limits.

        Editing to identical content is not an error.
        """

        t("botapp.handlers.mixins.CallbackResponseMixin._edit_callback_message")
        kwargs.setdefault("parse_mode", ParseMode.MARKDOWN_V2)
        attempts = 0
        while True:
            try:
                await query.edit_message_text(text, **kwargs)
                return
            except RetryAfter as exc:
                attempts += 1
                if attempts > retries:
                    raise
                wait_time = float(getattr(exc, "retry_after", 1)) + 0.5
                self.logger.warning("Rate limited while editing message; retrying in %.1fs", wait_time)
                await asyncio.sleep(wait_time)
            except BadRequest as exc:
                if "message is not modified" in str(exc).lower():
                    return
                raise

    async def _send(self, bot, chat_id: int, text: str, **kwargs: Any) -> Optional[Message]:
        t("botapp.handlers.mixins.CallbackResponseMixin._send")
        kwargs.setdefault("parse_mode", ParseMode.MARKDOWN_V2)
        return await bot.send_message(chat_id=chat_id, text=text, **kwargs)

    async def _delete_message_safe(self, message: Optional[Message]) -> bool:
        t("botapp.handlers.mixins.CallbackResponseMixin._delete_message_safe")
        if message is None:
            return False
        try:
            await message.delete()
            return True
        except TelegramError as exc:
            self.logger.debug("Failed to delete message: %s", exc)
            return False


__all__ = ["CallbackResponseMixin"]
