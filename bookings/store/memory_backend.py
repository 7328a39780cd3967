"""In-process backend used for local runs and tests."""

from __future__ import annotations

import asyncio
import itertools
import logging
from typing import Any, Dict, List, Optional

from tracking import t

from bookings.errors import BookingNotFoundError
from bookings.store.backends import ErrorCallback, RawDocument, SnapshotCallback


class _MemoryWatch:
    def __init__(self, backend: "InMemoryBackend", collection: str,
                 on_snapshot: SnapshotCallback, on_error: ErrorCallback) -> None:
        self.backend = backend
        self.collection = collection
        self.on_snapshot = on_snapshot
        self.on_error = on_error
        self.active = True

    def cancel(self) -> None:
        t('bookings.store.memory_backend._MemoryWatch.cancel')
        if not self.active:
            return
        self.active = False
        self.backend._drop_watch(self)


class InMemoryBackend:
    """Collection store that delivers snapshots synchronously.

    Writes are visible to watchers before ``add``/``delete`` return, which
    keeps tests deterministic. ``fail_writes`` makes the next writes raise the
    given exception and ``write_delay`` stalls them, to exercise timeouts.
    """

    def __init__(self, *, logger: Optional[logging.Logger] = None) -> None:
        t('bookings.store.memory_backend.InMemoryBackend.__init__')
        self.logger = logger or logging.getLogger('InMemoryBackend')
        self._documents: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self._watches: List[_MemoryWatch] = []
        self._ids = itertools.count(1)
        self.fail_writes: Optional[Exception] = None
        self.write_delay: float = 0.0
        self.add_calls = 0
        self.delete_calls = 0

    # ------------------------------------------------------------------
    # Backend contract
    def watch(self, collection: str, on_snapshot: SnapshotCallback,
              on_error: ErrorCallback) -> _MemoryWatch:
        t('bookings.store.memory_backend.InMemoryBackend.watch')
        handle = _MemoryWatch(self, collection, on_snapshot, on_error)
        self._watches.append(handle)
        self.logger.debug("Watch opened on %s (%s active)", collection, len(self._watches))
        on_snapshot(self.documents(collection))
        return handle

    async def add(self, collection: str, document: Dict[str, Any]) -> str:
        t('bookings.store.memory_backend.InMemoryBackend.add')
        self.add_calls += 1
        await self._before_write()
        doc_id = f"doc{next(self._ids):04d}"
        self._documents.setdefault(collection, {})[doc_id] = dict(document)
        self.logger.debug("Added %s to %s", doc_id, collection)
        self._broadcast(collection)
        return doc_id

    async def delete(self, collection: str, doc_id: str) -> None:
        t('bookings.store.memory_backend.InMemoryBackend.delete')
        self.delete_calls += 1
        await self._before_write()
        stored = self._documents.get(collection, {})
        if doc_id not in stored:
            raise BookingNotFoundError(doc_id)
        del stored[doc_id]
        self.logger.debug("Deleted %s from %s", doc_id, collection)
        self._broadcast(collection)

    # ------------------------------------------------------------------
    # Helpers for seeding and fault injection
    def documents(self, collection: str) -> List[RawDocument]:
        t('bookings.store.memory_backend.InMemoryBackend.documents')
        return [
            (doc_id, dict(data))
            for doc_id, data in self._documents.get(collection, {}).items()
        ]

    def seed(self, collection: str, doc_id: str, document: Dict[str, Any]) -> None:
        """Insert a document with a chosen id and notify watchers."""
        t('bookings.store.memory_backend.InMemoryBackend.seed')
        self._documents.setdefault(collection, {})[doc_id] = dict(document)
        self._broadcast(collection)

    def redeliver(self, collection: str) -> None:
        """Send the unchanged collection to every watcher again."""
        t('bookings.store.memory_backend.InMemoryBackend.redeliver')
        self._broadcast(collection)

    def emit_error(self, collection: str, error: Exception) -> None:
        """Break every watch on ``collection`` with ``error``."""
        t('bookings.store.memory_backend.InMemoryBackend.emit_error')
        for handle in [w for w in self._watches if w.collection == collection]:
            handle.on_error(error)

    @property
    def active_watches(self) -> int:
        return len(self._watches)

    def _drop_watch(self, handle: _MemoryWatch) -> None:
        t('bookings.store.memory_backend.InMemoryBackend._drop_watch')
        if handle in self._watches:
            self._watches.remove(handle)
        self.logger.debug("Watch closed on %s (%s active)", handle.collection, len(self._watches))

    def _broadcast(self, collection: str) -> None:
        t('bookings.store.memory_backend.InMemoryBackend._broadcast')
        records = self.documents(collection)
        for handle in [w for w in self._watches if w.collection == collection]:
            if handle.active:
                handle.on_snapshot(list(records))

    async def _before_write(self) -> None:
        t('bookings.store.memory_backend.InMemoryBackend._before_write')
        if self.write_delay:
            await asyncio.sleep(self.write_delay)
        if self.fail_writes is not None:
            raise self.fail_writes


__all__ = ["InMemoryBackend"]
