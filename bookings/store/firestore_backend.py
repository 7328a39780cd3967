"""
Firestore helper layer for the booking store.

The watch uses the synchronous client's ``on_snapshot`` listener, whose
callbacks run on a background thread owned by the Firestore library. Every
callback is forwarded to the asyncio loop with ``call_soon_threadsafe`` so the
store only ever changes state on the loop thread. Writes run the blocking
client calls in a worker thread.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional

from google.cloud import exceptions as gexc
from google.cloud import firestore

from tracking import t

from bookings.errors import ConnectivityError, SyncLostError
from bookings.store.backends import ErrorCallback, SnapshotCallback
from infrastructure import constants


class FirestoreWatch:
    """Live query handle plus the watchdog task that supervises it."""

    def __init__(self, watch: Any, logger: logging.Logger) -> None:
        t('bookings.store.firestore_backend.FirestoreWatch.__init__')
        self._watch = watch
        self._logger = logger
        self._watchdog: Optional[asyncio.Task] = None
        self.cancelled = False

    @property
    def is_active(self) -> bool:
        return bool(getattr(self._watch, "is_active", True))

    def attach_watchdog(self, task: asyncio.Task) -> None:
        self._watchdog = task

    def cancel(self) -> None:
        t('bookings.store.firestore_backend.FirestoreWatch.cancel')
        if self.cancelled:
            return
        self.cancelled = True
        if self._watchdog is not None:
            self._watchdog.cancel()
        try:
            self._watch.unsubscribe()
        except Exception as exc:  # pragma: no cover - library teardown noise
            self._logger.warning("Error while closing Firestore watch: %s", exc)


class FirestoreBackend:
    """Booking backend on a Cloud Firestore collection."""

    def __init__(
        self,
        client: firestore.Client,
        *,
        watchdog_interval: float = constants.SYNC_WATCHDOG_INTERVAL_SECONDS,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        t('bookings.store.firestore_backend.FirestoreBackend.__init__')
        self._client = client
        self._watchdog_interval = watchdog_interval
        self.logger = logger or logging.getLogger('FirestoreBackend')

    def watch(self, collection: str, on_snapshot: SnapshotCallback,
              on_error: ErrorCallback) -> FirestoreWatch:
        """Open an ordered live query; must be called from the event loop."""

        t('bookings.store.firestore_backend.FirestoreBackend.watch')
        loop = asyncio.get_running_loop()
        query = (
            self._client.collection(collection)
            .order_by(constants.FIELD_DATE)
            .order_by(constants.FIELD_START_TIME)
        )

        def _on_docs(docs, changes, read_time) -> None:
            # Runs on the Firestore watch thread.
            records = [(doc.id, doc.to_dict() or {}) for doc in docs]
            loop.call_soon_threadsafe(on_snapshot, records)

        try:
            raw_watch = query.on_snapshot(_on_docs)
        except gexc.GoogleCloudError as exc:
            raise SyncLostError(f"Could not open live query on {collection}: {exc}") from exc

        handle = FirestoreWatch(raw_watch, self.logger)
        handle.attach_watchdog(
            loop.create_task(self._watchdog(collection, handle, on_error))
        )
        self.logger.info("Live query opened on collection %s", collection)
        return handle

    async def _watchdog(self, collection: str, handle: FirestoreWatch,
                        on_error: ErrorCallback) -> None:
        """Report a watch that stopped streaming without being cancelled."""

        t('bookings.store.firestore_backend.FirestoreBackend._watchdog')
        while not handle.cancelled:
            await asyncio.sleep(self._watchdog_interval)
            if handle.cancelled:
                return
            if not handle.is_active:
                self.logger.error("Live query on %s stopped unexpectedly", collection)
                on_error(SyncLostError(f"Live query on {collection} stopped"))
                return

    async def add(self, collection: str, document: Dict[str, Any]) -> str:
        t('bookings.store.firestore_backend.FirestoreBackend.add')
        try:
            _, doc_ref = await asyncio.to_thread(
                self._client.collection(collection).add, document
            )
        except gexc.GoogleCloudError as err:
            raise ConnectivityError(f"Firestore error: {err}") from err
        return doc_ref.id

    async def delete(self, collection: str, doc_id: str) -> None:
        t('bookings.store.firestore_backend.FirestoreBackend.delete')
        try:
            await asyncio.to_thread(
                self._client.collection(collection).document(doc_id).delete
            )
        except gexc.GoogleCloudError as err:
            raise ConnectivityError(f"Firestore error: {err}") from err


def create_firestore_client(
    project: Optional[str] = None,
    credentials_file: Optional[str] = None,
) -> firestore.Client:
    """Build a client from a service-account file or Application Default Credentials."""

    t('bookings.store.firestore_backend.create_firestore_client')
    if credentials_file:
        return firestore.Client.from_service_account_json(credentials_file, project=project)
    return firestore.Client(project=project)


__all__ = ["FirestoreBackend", "FirestoreWatch", "create_firestore_client"]
