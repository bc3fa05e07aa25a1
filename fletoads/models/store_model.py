from datetime import datetime

from ..constants.service_code import COLLECTIONS
from ..utils.mongo_helpers import create_id_filter, normalize_name, to_object_id
from .base_model import BaseModel


class Store(BaseModel):
    """
    A merchant's store ("loja"); exactly one per owner. Its public page is
    the storefront ("vitrine").
    """

    collection_name = COLLECTIONS["STORES"]

    def __init__(self, owner_id, name, slug=None, **kwargs):
        super().__init__(owner_id=owner_id, **kwargs)
        self.name = name
        self.normalized_name = normalize_name(name)
        self.slug = slug or self.normalized_name
        self.active = kwargs.get("active", True)

    @classmethod
    def get_by_owner(cls, owner_id):
        return cls.collection().find_one({"owner_id": to_object_id(owner_id)})

    @classmethod
    def find_public(cls, id_or_slug):
        """Active store by ObjectId, slug or normalized name."""
        query = {"$and": [create_id_filter(id_or_slug), {"active": True}]}
        return cls.collection().find_one(query)

    @classmethod
    def slug_taken(cls, slug, exclude_owner_id=None):
        query = {"slug": slug}
        if exclude_owner_id is not None:
            query["owner_id"] = {"$ne": to_object_id(exclude_owner_id)}
        return cls.collection().find_one(query, {"_id": 1}) is not None

    @classmethod
    def upsert_for_owner(cls, owner_id, **fields):
        """
        Create the owner's store on first call, update it afterwards.
        Returns (store_doc, created).
        """
        owner_oid = to_object_id(owner_id)
        now = datetime.utcnow()

        if fields.get("name"):
            fields["normalized_name"] = normalize_name(fields["name"])
            fields.setdefault("slug", fields["normalized_name"])

        existing = cls.get_by_owner(owner_oid)
        if existing:
            fields["updated_at"] = now
            cls.collection().update_one({"_id": existing["_id"]}, {"$set": fields})
            return cls.collection().find_one({"_id": existing["_id"]}), False

        store = cls(owner_id=owner_oid, **fields)
        store_id = store.save()
        return cls.get_by_id(store_id), True

    @classmethod
    def create_indexes(cls):
        cls.collection().create_index("owner_id", unique=True)
        cls.collection().create_index("slug")
        cls.collection().create_index("normalized_name")
