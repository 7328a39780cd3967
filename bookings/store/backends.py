"""Contracts between the booking store and a live document backend."""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping, Protocol, Tuple

# A delivered document: (store-assigned id, stored fields)
RawDocument = Tuple[str, Mapping[str, Any]]
SnapshotCallback = Callable[[List[RawDocument]], None]
ErrorCallback = Callable[[Exception], None]


class WatchHandle(Protocol):
    """Cancels one live query."""

    def cancel(self) -> None:
        ...


class BookingBackend(Protocol):
    """A hosted collection with live queries.

    ``watch`` delivers the full collection on the event loop thread every time
    it changes and reports a broken feed through ``on_error``. ``add`` and
    ``delete`` raise :class:`bookings.errors.ConnectivityError` (or
    :class:`bookings.errors.BookingNotFoundError`) on failure.
    """

    def watch(
        self,
        collection: str,
        on_snapshot: SnapshotCallback,
        on_error: ErrorCallback,
    ) -> WatchHandle:
        ...

    async def add(self, collection: str, document: Dict[str, Any]) -> str:
        ...

    async def delete(self, collection: str, doc_id: str) -> None:
        ...


__all__ = [
    "BookingBackend",
    "ErrorCallback",
    "RawDocument",
    "SnapshotCallback",
    "WatchHandle",
]
