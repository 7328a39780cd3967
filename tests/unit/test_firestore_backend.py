from tracking import t

import asyncio
import threading
from types import SimpleNamespace

import pytest
from google.cloud import exceptions as gexc

from bookings.errors import ConnectivityError, SyncLostError
from bookings.store.firestore_backend import FirestoreBackend
from tests.helpers import DummyLogger


class FakeWatch:
    def __init__(self, callback):
        self.callback = callback
        self.is_active = True
        self.unsubscribed = 0

    def unsubscribe(self):
        self.unsubscribed += 1


class FakeDocRef:
    def __init__(self, collection, doc_id):
        self.collection = collection
        self.id = doc_id

    def delete(self):
        if self.collection.fail is not None:
            raise self.collection.fail
        self.collection.deleted.append(self.id)


class FakeCollection:
    def __init__(self):
        self.orderings = []
        self.watch = None
        self.added = []
        self.deleted = []
        self.fail = None

    def order_by(self, field):
        self.orderings.append(field)
        return self

    def on_snapshot(self, callback):
        self.watch = FakeWatch(callback)
        return self.watch

    def add(self, document):
        if self.fail is not None:
            raise self.fail
        self.added.append(document)
        return None, FakeDocRef(self, f"fs{len(self.added)}")

    def document(self, doc_id):
        return FakeDocRef(self, doc_id)


class FakeClient:
    def __init__(self):
        self.collections = {}

    def collection(self, name):
        return self.collections.setdefault(name, FakeCollection())


def _doc(doc_id, data):
    return SimpleNamespace(id=doc_id, to_dict=lambda: dict(data))


@pytest.mark.asyncio
async def test_watch_orders_query_and_forwards_from_thread():
    t('tests.unit.test_firestore_backend.test_watch_orders_query_and_forwards_from_thread')
    client = FakeClient()
    backend = FirestoreBackend(client, watchdog_interval=60, logger=DummyLogger())
    delivered = []

    handle = backend.watch("bookings", delivered.append, lambda error: None)
    collection = client.collections["bookings"]
    assert collection.orderings == ["date", "startTime"]

    worker = threading.Thread(
        target=collection.watch.callback,
        args=([_doc("a", {"userName": "Alice"})], [], None),
    )
    worker.start()
    worker.join()
    for _ in range(5):
        await asyncio.sleep(0)

    assert delivered == [[("a", {"userName": "Alice"})]]

    handle.cancel()
    handle.cancel()
    assert collection.watch.unsubscribed == 1


@pytest.mark.asyncio
async def test_watchdog_reports_stopped_watch():
    t('tests.unit.test_firestore_backend.test_watchdog_reports_stopped_watch')
    client = FakeClient()
    backend = FirestoreBackend(client, watchdog_interval=0.01, logger=DummyLogger())
    errors = []

    handle = backend.watch("bookings", lambda records: None, errors.append)
    client.collections["bookings"].watch.is_active = False
    await asyncio.sleep(0.05)

    assert len(errors) == 1
    assert isinstance(errors[0], SyncLostError)
    handle.cancel()


@pytest.mark.asyncio
async def test_add_and_delete_use_collection():
    t('tests.unit.test_firestore_backend.test_add_and_delete_use_collection')
    client = FakeClient()
    backend = FirestoreBackend(client, logger=DummyLogger())

    doc_id = await backend.add("bookings", {"userName": "Bob"})
    await backend.delete("bookings", doc_id)

    collection = client.collections["bookings"]
    assert doc_id == "fs1"
    assert collection.added == [{"userName": "Bob"}]
    assert collection.deleted == ["fs1"]


@pytest.mark.asyncio
async def test_write_failures_become_connectivity_errors():
    t('tests.unit.test_firestore_backend.test_write_failures_become_connectivity_errors')
    client = FakeClient()
    backend = FirestoreBackend(client, logger=DummyLogger())
    client.collection("bookings").fail = gexc.GoogleCloudError("unavailable")

    with pytest.raises(ConnectivityError):
        await backend.add("bookings", {"userName": "Bob"})
    with pytest.raises(ConnectivityError):
        await backend.delete("bookings", "fs1")
