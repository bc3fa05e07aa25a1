import threading

from flask import current_app
from pymongo import MongoClient


class MongoDB:
    """
    Process-wide MongoDB handle.

    Built once by create_app() (or injected, e.g. a mongomock client in tests)
    and stored on app.extensions["mongo"]. connect() is lazy and idempotent;
    the lock makes the first concurrent use open a single client.
    """

    def __init__(self, uri=None, db_name=None, client=None):
        self.uri = uri
        self.db_name = db_name
        self.client = client
        self.db = None
        self._lock = threading.Lock()

    def init_app(self, app):
        if self.uri is None:
            self.uri = app.config.get("MONGO_URI")
        if self.db_name is None:
            self.db_name = app.config.get("DB_NAME", "fletoads")
        app.extensions["mongo"] = self

    def connect(self):
        if self.db is not None:
            return self.db

        with self._lock:
            if self.db is None:
                if self.client is None:
                    self.client = MongoClient(self.uri, tz_aware=False)
                self.db = self.client[self.db_name]
        return self.db

    def get_collection(self, name):
        return self.connect()[name]

    def close(self):
        with self._lock:
            if self.client is not None:
                self.client.close()
            self.client = None
            self.db = None


def get_db() -> MongoDB:
    """Return the MongoDB handle bound to the current Flask app."""
    mongo = current_app.extensions.get("mongo")
    if mongo is None:
        raise RuntimeError("MongoDB not initialized")
    return mongo
