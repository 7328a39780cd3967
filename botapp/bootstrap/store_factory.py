"""Factories for the booking store and its backend."""

from __future__ import annotations
from tracking import t

import logging

from bookings.store import BookingBackend, BookingStore, InMemoryBackend
from botapp.config import BotAppConfig
from infrastructure.settings import STORE_FIRESTORE, STORE_MEMORY


def build_backend(config: BotAppConfig) -> BookingBackend:
    """Return the backend named by ``config.store.backend``."""

    t('botapp.bootstrap.store_factory.build_backend')
    logger = logging.getLogger('BookingStore')
    backend_name = config.store.backend

    if backend_name == STORE_MEMORY:
        logger.warning("Using in-memory booking store; bookings are lost on restart")
        return InMemoryBackend()

    if backend_name == STORE_FIRESTORE:
        from bookings.store.firestore_backend import FirestoreBackend, create_firestore_client

        client = create_firestore_client(
            project=config.store.firestore_project,
            credentials_file=config.store.firestore_credentials_file,
        )
        logger.info("Using Firestore collection %s", config.store.collection)
        return FirestoreBackend(client)

    raise ValueError(f"Unsupported booking store backend: {backend_name!r}")


def build_store(config: BotAppConfig, backend: BookingBackend) -> BookingStore:
    t('botapp.bootstrap.store_factory.build_store')
    return BookingStore(
        backend,
        collection=config.store.collection,
        timeout=config.store.timeout_seconds,
    )


__all__ = ['build_backend', 'build_store']
