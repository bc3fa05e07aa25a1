from ..constants.service_code import COLLECTIONS
from ..utils.mongo_helpers import to_object_id
from .base_model import BaseModel

COUPON_TYPES = ["percentual", "valor_fixo", "frete_gratis"]


class Coupon(BaseModel):
    collection_name = COLLECTIONS["COUPONS"]

    TYPE_PERCENT = "percentual"
    TYPE_FIXED = "valor_fixo"
    TYPE_FREE_SHIPPING = "frete_gratis"

    def __init__(self, owner_id, code, type, value=0, store_id=None, uses=0, active=True, **kwargs):
        super().__init__(owner_id=owner_id, store_id=store_id, **kwargs)
        self.code = code.strip().upper()
        self.type = type
        self.value = float(value or 0)
        self.uses = int(uses or 0)
        self.active = active

    @classmethod
    def get_active_by_code(cls, owner_id, code):
        return cls.collection().find_one({
            "owner_id": to_object_id(owner_id),
            "code": (code or "").strip().upper(),
            "active": True,
        })

    @classmethod
    def code_exists(cls, owner_id, code, exclude_id=None):
        query = {"owner_id": to_object_id(owner_id), "code": (code or "").strip().upper()}
        if exclude_id is not None:
            query["_id"] = {"$ne": to_object_id(exclude_id)}
        return cls.collection().find_one(query, {"_id": 1}) is not None

    @classmethod
    def create_indexes(cls):
        super().create_indexes()
        cls.collection().create_index([("owner_id", 1), ("code", 1)], unique=True)
