"""Chat delivery for transient notifications and the sync-lost notice."""

from __future__ import annotations

import asyncio
import logging
from typing import Iterable, Optional, Set

from telegram.error import TelegramError

from tracking import t

from bookings.notifications import Notification, NotificationCenter
from botapp.i18n.translator import Translator, create_translator
from botapp.ui.telegram_ui import TelegramUI


class TelegramNotificationPresenter:
    """Mirror one chat's :class:`NotificationCenter` as a chat message.

    Showing a notification sends a message and removes the previous one;
    dismissal deletes it. Renders are serialised so a quick replacement
    never leaves two toasts behind.
    """

    def __init__(self, bot, chat_id: int, *, logger: Optional[logging.Logger] = None) -> None:
        t('botapp.notifications.TelegramNotificationPresenter.__init__')
        self.bot = bot
        self.chat_id = chat_id
        self.logger = logger or logging.getLogger('NotificationPresenter')
        self.message_id: Optional[int] = None
        self._lock = asyncio.Lock()
        self._tasks: Set[asyncio.Task] = set()
        self._remove_listener = None

    def attach(self, center: NotificationCenter) -> None:
        t('botapp.notifications.TelegramNotificationPresenter.attach')
        self.detach()
        self._remove_listener = center.add_listener(self.on_notification)

    def detach(self) -> None:
        t('botapp.notifications.TelegramNotificationPresenter.detach')
        if self._remove_listener is not None:
            self._remove_listener()
            self._remove_listener = None

    def on_notification(self, notification: Optional[Notification]) -> None:
        """Listener entry point; schedules the chat update on the running loop."""

        t('botapp.notifications.TelegramNotificationPresenter.on_notification')
        task = asyncio.get_running_loop().create_task(self.render(notification))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def render(self, notification: Optional[Notification]) -> None:
        t('botapp.notifications.TelegramNotificationPresenter.render')
        async with self._lock:
            await self._delete_current()
            if notification is None:
                return
            try:
                message = await self.bot.send_message(
                    chat_id=self.chat_id,
                    text=TelegramUI.format_notification(notification),
                )
            except TelegramError as exc:
                self.logger.warning("Could not show notification in chat %s: %s", self.chat_id, exc)
                return
            self.message_id = message.message_id

    async def _delete_current(self) -> None:
        if self.message_id is None:
            return
        message_id, self.message_id = self.message_id, None
        try:
            await self.bot.delete_message(chat_id=self.chat_id, message_id=message_id)
        except TelegramError as exc:
            self.logger.debug("Notification %s already gone in chat %s: %s", message_id, self.chat_id, exc)

    async def drain(self) -> None:
        """Wait for scheduled renders; used on shutdown and in tests."""

        t('botapp.notifications.TelegramNotificationPresenter.drain')
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)


async def broadcast_sync_lost(
    bot,
    chat_ids: Iterable[int],
    *,
    translator: Optional[Translator] = None,
    logger: Optional[logging.Logger] = None,
) -> int:
    """Send the persistent sync-lost notice to each chat; returns how many got it."""

    t('botapp.notifications.broadcast_sync_lost')
    tr = translator or create_translator()
    logger = logger or logging.getLogger('NotificationPresenter')
    delivered = 0
    for chat_id in chat_ids:
        try:
            await bot.send_message(chat_id=chat_id, text=f"⚠️ {tr.t('notif.sync_lost')}")
        except TelegramError as exc:
            logger.warning("Failed to send sync-lost notice to %s: %s", chat_id, exc)
            continue
        delivered += 1
    logger.info("Sync-lost notice delivered to %s chat(s)", delivered)
    return delivered


__all__ = [
    "TelegramNotificationPresenter",
    "broadcast_sync_lost",
]
