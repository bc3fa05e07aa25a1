from datetime import datetime

from pymongo import DESCENDING

from ..constants.service_code import COLLECTIONS
from ..utils.logger import Log
from ..utils.mongo_helpers import to_object_id
from .base_model import BaseModel


class Notification(BaseModel):
    collection_name = COLLECTIONS["NOTIFICATIONS"]

    TYPE_INFO = "info"
    TYPE_SUCCESS = "success"
    TYPE_WARNING = "warning"

    def __init__(self, user_id, title, message, type=TYPE_INFO, **kwargs):
        super().__init__(**kwargs)
        self.user_id = to_object_id(user_id)
        self.title = title
        self.message = message
        self.type = type
        self.read = False

    @classmethod
    def notify(cls, user_id, title, message, type=TYPE_INFO):
        """
        Best-effort: a failed notification must not undo the action that
        triggered it, so errors are logged and None is returned.
        """
        try:
            return cls(user_id=user_id, title=title, message=message, type=type).save()
        except Exception as e:
            Log.error(f"[notification_model.py][Notification][notify][{user_id}] {e}")
            return None

    @classmethod
    def list_for_user(cls, user_id, unread_only=False, limit=50):
        query = {"user_id": to_object_id(user_id)}
        if unread_only:
            query["read"] = False
        return list(cls.collection().find(query).sort("created_at", DESCENDING).limit(limit))

    @classmethod
    def mark_read(cls, notification_id, user_id):
        oid = to_object_id(notification_id)
        if oid is None:
            return False
        result = cls.collection().update_one(
            {"_id": oid, "user_id": to_object_id(user_id)},
            {"$set": {"read": True, "read_at": datetime.utcnow()}},
        )
        return result.matched_count > 0

    @classmethod
    def create_indexes(cls):
        cls.collection().create_index([("user_id", 1), ("created_at", -1)])
