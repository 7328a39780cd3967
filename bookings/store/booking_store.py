"""
Booking Store

Client-side mirror of the remote booking collection. The store owns one live
query on the backend, shared by every subscriber, and republishes each
delivered snapshot sorted by date then start time. Writes go straight to the
backend: nothing is applied locally until the feed delivers it.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, List, Optional, Tuple

from tracking import t

from bookings.errors import BookingError, ConnectivityError, SyncLostError
from bookings.models import Booking, NewBooking
from bookings.store.backends import BookingBackend, RawDocument, WatchHandle
from infrastructure import constants

Snapshot = Tuple[Booking, ...]
UpdateCallback = Callable[[Snapshot], None]
ErrorListener = Callable[[SyncLostError], None]


class Subscription:
    """Handle returned by :meth:`BookingStore.subscribe`.

    Calling :meth:`cancel` (or the handle itself) more than once is a no-op.
    """

    def __init__(self, store: "BookingStore", on_update: UpdateCallback,
                 on_error: Optional[ErrorListener]) -> None:
        self._store = store
        self._on_update = on_update
        self._on_error = on_error
        self.active = True

    def cancel(self) -> None:
        t('bookings.store.booking_store.Subscription.cancel')
        if not self.active:
            return
        self.active = False
        self._store._unsubscribe(self)

    __call__ = cancel


class BookingStore:
    """Live, ordered view of the booking collection."""

    def __init__(
        self,
        backend: BookingBackend,
        *,
        collection: str = constants.DEFAULT_COLLECTION,
        timeout: float = constants.DEFAULT_STORE_TIMEOUT_SECONDS,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        t('bookings.store.booking_store.BookingStore.__init__')
        self._backend = backend
        self.collection = collection
        self.timeout = timeout
        self.logger = logger or logging.getLogger('BookingStore')
        self._snapshot: Snapshot = ()
        self._received = False
        self._subscriptions: List[Subscription] = []
        self._watch: Optional[WatchHandle] = None
        self._watching = False
        self.sync_error: Optional[SyncLostError] = None

    # ------------------------------------------------------------------
    # Read access
    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot

    @property
    def loaded(self) -> bool:
        """True once the first snapshot has arrived from the backend."""
        return self._received

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    def get(self, booking_id: str) -> Optional[Booking]:
        t('bookings.store.booking_store.BookingStore.get')
        for booking in self._snapshot:
            if booking.id == booking_id:
                return booking
        return None

    # ------------------------------------------------------------------
    # Live feed
    def subscribe(self, on_update: UpdateCallback,
                  on_error: Optional[ErrorListener] = None) -> Subscription:
        """Register a listener and call it once with the current snapshot."""

        t('bookings.store.booking_store.BookingStore.subscribe')
        subscription = Subscription(self, on_update, on_error)
        self._subscriptions.append(subscription)

        on_update(self._snapshot)

        if self.sync_error is not None:
            if on_error is not None:
                on_error(self.sync_error)
        elif not self._watching:
            self._open_watch()

        return subscription

    def close(self) -> None:
        """Cancel every subscription and release the live query."""

        t('bookings.store.booking_store.BookingStore.close')
        for subscription in list(self._subscriptions):
            subscription.cancel()
        self._release_watch()

    def _open_watch(self) -> None:
        t('bookings.store.booking_store.BookingStore._open_watch')
        self._watching = True
        try:
            self._watch = self._backend.watch(
                self.collection,
                self._on_remote_snapshot,
                self._on_remote_error,
            )
        except BookingError as exc:
            self._watching = False
            self._on_remote_error(exc)
            return
        self.logger.info("Subscribed to live collection %s", self.collection)

    def _release_watch(self) -> None:
        t('bookings.store.booking_store.BookingStore._release_watch')
        handle = self._watch
        self._watch = None
        self._watching = False
        if handle is not None:
            handle.cancel()
            self.logger.info("Live collection %s released", self.collection)

    def _unsubscribe(self, subscription: Subscription) -> None:
        t('bookings.store.booking_store.BookingStore._unsubscribe')
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)
        if not self._subscriptions:
            self._release_watch()

    def _on_remote_snapshot(self, records: List[RawDocument]) -> None:
        t('bookings.store.booking_store.BookingStore._on_remote_snapshot')
        if not self._watching:
            return

        snapshot = tuple(
            sorted(
                (Booking.from_document(doc_id, data) for doc_id, data in records),
                key=lambda booking: booking.sort_key,
            )
        )

        if self._received and snapshot == self._snapshot:
            self.logger.debug("Ignoring duplicate snapshot (%s bookings)", len(snapshot))
            return

        self._snapshot = snapshot
        self._received = True
        self.logger.debug("Snapshot updated: %s bookings", len(snapshot))

        for subscription in list(self._subscriptions):
            if not subscription.active:
                continue
            try:
                subscription._on_update(snapshot)
            except Exception as exc:  # pragma: no cover
                self.logger.error("Snapshot listener failed: %s", exc, exc_info=True)

    def _on_remote_error(self, error: Exception) -> None:
        t('bookings.store.booking_store.BookingStore._on_remote_error')
        if isinstance(error, SyncLostError):
            sync_error = error
        else:
            sync_error = SyncLostError(f"Live booking feed lost: {error}")
            sync_error.__cause__ = error

        self.sync_error = sync_error
        self.logger.error("SYNC LOST on %s: %s", self.collection, sync_error)
        self._release_watch()

        for subscription in list(self._subscriptions):
            if subscription.active and subscription._on_error is not None:
                try:
                    subscription._on_error(sync_error)
                except Exception as exc:  # pragma: no cover
                    self.logger.error("Sync error listener failed: %s", exc, exc_info=True)

    # ------------------------------------------------------------------
    # Mutating intents
    async def create(self, booking: NewBooking) -> str:
        """Append ``booking`` to the collection and return its new id."""

        t('bookings.store.booking_store.BookingStore.create')
        try:
            doc_id = await asyncio.wait_for(
                self._backend.add(self.collection, booking.to_document()),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as exc:
            self.logger.warning("Create timed out after %ss", self.timeout)
            raise ConnectivityError(
                f"Timed out after {self.timeout}s while creating booking"
            ) from exc
        except BookingError as exc:
            self.logger.warning("Create failed: %s", exc)
            raise

        self.logger.info(
            "Booking %s created: %s %s %s-%s for %s",
            doc_id,
            booking.equipment_id,
            booking.date,
            booking.start_time,
            booking.end_time,
            booking.user_name,
        )
        return doc_id

    async def remove(self, booking_id: str) -> None:
        """Delete ``booking_id``; authorization is the caller's job."""

        t('bookings.store.booking_store.BookingStore.remove')
        try:
            await asyncio.wait_for(
                self._backend.delete(self.collection, booking_id),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as exc:
            self.logger.warning("Remove of %s timed out after %ss", booking_id, self.timeout)
            raise ConnectivityError(
                f"Timed out after {self.timeout}s while removing booking {booking_id}"
            ) from exc
        except BookingError as exc:
            self.logger.warning("Remove of %s failed: %s", booking_id, exc)
            raise

        self.logger.info("Booking %s removed", booking_id)


__all__ = ["BookingStore", "Subscription", "Snapshot"]
