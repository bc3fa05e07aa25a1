"""Tests for the shared MongoDB handle."""

import threading

import mongomock

from fletoads.extensions import db as db_module
from fletoads.extensions.db import MongoDB


def test_concurrent_first_connect_opens_a_single_client(monkeypatch):
    opened = []

    def fake_client(uri, **kwargs):
        client = mongomock.MongoClient()
        opened.append(client)
        return client

    monkeypatch.setattr(db_module, "MongoClient", fake_client)
    mongo = MongoDB(uri="mongodb://localhost:27017", db_name="fletoads_test")

    barrier = threading.Barrier(8)
    handles = []

    def worker():
        barrier.wait()
        handles.append(mongo.connect())

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(opened) == 1
    assert len(handles) == 8
    assert all(handle is handles[0] for handle in handles)
    assert mongo.connect() is handles[0]


def test_injected_client_is_used_and_close_resets():
    client = mongomock.MongoClient()
    mongo = MongoDB(db_name="fletoads_test", client=client)

    assert mongo.get_collection("planos").database.name == "fletoads_test"
    assert mongo.client is client

    mongo.close()
    assert mongo.client is None
    assert mongo.db is None
