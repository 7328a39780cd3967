"""Live booking store and its backends."""

from .backends import BookingBackend, RawDocument, WatchHandle
from .booking_store import BookingStore, Snapshot, Subscription
from .memory_backend import InMemoryBackend

__all__ = [
    "BookingBackend",
    "BookingStore",
    "InMemoryBackend",
    "RawDocument",
    "Snapshot",
    "Subscription",
    "WatchHandle",
]
