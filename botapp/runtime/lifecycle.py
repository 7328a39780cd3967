"""Lifecycle orchestration for the Telegram bot runtime."""

from __future__ import annotations
from tracking import t

import asyncio
import logging
import os
from typing import Optional, Set

import tracking
from bookings.errors import SyncLostError
from bookings.schedule import count_bookings
from bookings.store import Snapshot, Subscription
from botapp.bootstrap import BotDependencies
from botapp.notifications import broadcast_sync_lost

METRICS_INTERVAL_SECONDS = 300
TRACKING_FILE_NAME = 'function_calls.json'


class LifecycleManager:
    """Manage startup, shutdown, and periodic tasks for the bot runtime.

    On startup the bot takes one subscription on the booking store; every
    published snapshot refreshes the open board and list messages, and a
    lost feed is announced to every chat that has used the bot.
    """

    def __init__(
        self,
        dependencies: BotDependencies,
        *,
        logger: Optional[logging.Logger] = None,
        metrics_interval: float = METRICS_INTERVAL_SECONDS,
    ) -> None:
        t('botapp.runtime.lifecycle.LifecycleManager.__init__')
        self.dependencies = dependencies
        self.logger = logger or logging.getLogger('LifecycleManager')
        self.metrics_interval = metrics_interval
        self.application = None
        self.subscription: Optional[Subscription] = None
        self.metrics_task: Optional[asyncio.Task] = None
        self._tasks: Set[asyncio.Task] = set()

    def _spawn(self, coro) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def post_init(self, application) -> None:
        """Subscribe to the store once the Telegram application is ready."""

        t('botapp.runtime.lifecycle.LifecycleManager.post_init')
        self.application = application

        store = self.dependencies.store
        self.subscription = store.subscribe(self._on_snapshot, self._on_sync_lost)
        self.logger.info("Subscribed to booking collection %s", store.collection)

        self.metrics_task = asyncio.create_task(self._metrics_loop())
        self.logger.info("Bot started successfully - awaiting messages...")

    def _on_snapshot(self, snapshot: Snapshot) -> None:
        t('botapp.runtime.lifecycle.LifecycleManager._on_snapshot')
        self.logger.debug("Snapshot with %s booking(s) received", len(snapshot))
        self._spawn(self.dependencies.callback_handler.refresh_views())

    def _on_sync_lost(self, error: SyncLostError) -> None:
        t('botapp.runtime.lifecycle.LifecycleManager._on_sync_lost')
        self.logger.error("Live sync lost: %s", error)
        self._spawn(self._announce_sync_lost())

    async def _announce_sync_lost(self) -> None:
        t('botapp.runtime.lifecycle.LifecycleManager._announce_sync_lost')
        if self.application is not None:
            await broadcast_sync_lost(
                self.application.bot,
                self.dependencies.sessions.chat_ids(),
                translator=self.dependencies.translator,
                logger=self.logger,
            )
        await self.dependencies.callback_handler.refresh_views()

    async def post_stop(self, application) -> None:
        """Release the store subscription and flush call counts."""

        t('botapp.runtime.lifecycle.LifecycleManager.post_stop')
        self.logger.info("🔴 Starting bot shutdown sequence...")

        if self.metrics_task:
            self.metrics_task.cancel()
            try:
                await self.metrics_task
            except asyncio.CancelledError:
                pass
            self.metrics_task = None

        if self.subscription is not None:
            self.subscription.cancel()
            self.subscription = None

        self.dependencies.sessions.close()
        self.dependencies.store.close()

        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

        written = tracking.save_counts(os.path.join(self.dependencies.config.log_directory, TRACKING_FILE_NAME))
        if written:
            self.logger.info("Function call counts written to %s", written)

        self.logger.info("✅ Bot shutdown sequence completed")
        self.application = None

    async def log_metrics(self) -> None:
        """Log a one-line summary of the store and chat sessions."""

        t('botapp.runtime.lifecycle.LifecycleManager.log_metrics')
        store = self.dependencies.store
        self.logger.info(
            "=== BOT METRICS === bookings=%s loaded=%s subscribers=%s chats=%s sync=%s",
            count_bookings(store.snapshot),
            store.loaded,
            store.subscriber_count,
            len(self.dependencies.sessions),
            "lost" if store.sync_error is not None else "live",
        )

    async def _metrics_loop(self) -> None:
        """Periodic metrics logging loop."""

        t('botapp.runtime.lifecycle.LifecycleManager._metrics_loop')
        try:
            while True:
                await self.log_metrics()
                await asyncio.sleep(self.metrics_interval)
        except asyncio.CancelledError:
            self.logger.info("Metrics logging task cancelled")
            raise


__all__ = ['LifecycleManager']
