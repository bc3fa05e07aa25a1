# fletoads/models/base_model.py

from datetime import datetime

from pymongo import DESCENDING

from ..extensions.db import get_db
from ..utils.mongo_helpers import to_object_id


class BaseModel:
    """
    A base class for owner-scoped models providing common CRUD operations.

    Every owned document stores its owner as the `owner_id` ObjectId. Passing
    owner_id=None to the class-level helpers removes the owner scope (admin
    access).
    """
    collection_name = None

    def __init__(self, owner_id=None, store_id=None, **kwargs):
        self.owner_id = to_object_id(owner_id) if owner_id is not None else None
        if store_id is not None:
            self.store_id = to_object_id(store_id)
        self.created_at = datetime.utcnow()
        self.updated_at = datetime.utcnow()

        # Initialize model attributes based on kwargs
        for key, value in kwargs.items():
            setattr(self, key, value)

    def to_dict(self):
        """
        Convert the model object to a dictionary representation, skipping
        unset (None) attributes.
        """
        return {key: value for key, value in self.__dict__.items() if value is not None}

    @classmethod
    def collection(cls):
        return get_db().get_collection(cls.collection_name)

    @staticmethod
    def _scoped(record_id, owner_id=None):
        oid = to_object_id(record_id)
        if oid is None:
            return None
        query = {"_id": oid}
        if owner_id is not None:
            query["owner_id"] = to_object_id(owner_id)
        return query

    def save(self):
        result = self.collection().insert_one(self.to_dict())
        return str(result.inserted_id)

    @classmethod
    def get_by_id(cls, record_id, owner_id=None):
        """
        Retrieve a record by its ID, optionally restricted to an owner.
        Invalid ids behave like missing records.
        """
        query = cls._scoped(record_id, owner_id)
        if query is None:
            return None
        return cls.collection().find_one(query)

    @classmethod
    def get_all(cls, owner_id=None, query=None, page=1, per_page=20, sort_field="created_at"):
        """
        Paginated listing: {items, total_count, total_pages, current_page, per_page}.
        """
        query = dict(query or {})
        if owner_id is not None:
            query["owner_id"] = to_object_id(owner_id)

        collection = cls.collection()
        total_count = collection.count_documents(query)
        cursor = (
            collection.find(query)
            .sort(sort_field, DESCENDING)
            .skip((page - 1) * per_page)
            .limit(per_page)
        )
        items = list(cursor)
        total_pages = (total_count + per_page - 1) // per_page

        return {
            "items": items,
            "total_count": total_count,
            "total_pages": total_pages,
            "current_page": page,
            "per_page": per_page,
        }

    @classmethod
    def update(cls, record_id, owner_id=None, **updates):
        """
        Update a record by its ID. Returns True when a record matched.
        """
        query = cls._scoped(record_id, owner_id)
        if query is None:
            return False
        updates["updated_at"] = datetime.utcnow()
        result = cls.collection().update_one(query, {"$set": updates})
        return result.matched_count > 0

    @classmethod
    def delete(cls, record_id, owner_id=None):
        query = cls._scoped(record_id, owner_id)
        if query is None:
            return False
        result = cls.collection().delete_one(query)
        return result.deleted_count > 0

    @classmethod
    def create_indexes(cls):
        collection = cls.collection()
        collection.create_index([("owner_id", 1), ("created_at", -1)])
        collection.create_index([("owner_id", 1), ("active", 1)])
