import bcrypt
from datetime import datetime

from ..constants.service_code import COLLECTIONS, ROLES
from ..utils.logger import Log
from ..utils.mongo_helpers import to_object_id
from .base_model import BaseModel

# Never leave the model layer
PRIVATE_FIELDS = ("password",)


class User(BaseModel):
    """
    Platform account (merchant or administrator).
    """

    collection_name = COLLECTIONS["USERS"]

    def __init__(
        self,
        email,
        password,
        name=None,
        role=ROLES["USER"],
        phone=None,
        store_id=None,
        active=True,
        email_verified=False,
    ):
        super().__init__()

        self.email = email.strip().lower()
        self.name = name
        self.role = role
        self.phone = phone
        self.store_id = to_object_id(store_id) if store_id else None
        self.active = active
        self.email_verified = email_verified

        # Only hash the password if it's not already bcrypt-hashed
        if password and not password.startswith("$2b$"):
            self.password = bcrypt.hashpw(
                password.encode("utf-8"), bcrypt.gensalt()
            ).decode("utf-8")
        else:
            self.password = password

    def __str__(self):
        return f"User with email {self.email}"

    @staticmethod
    def public_view(user):
        if not user:
            return None
        return {key: value for key, value in user.items() if key not in PRIVATE_FIELDS}

    @classmethod
    def get_by_email(cls, email):
        if not email:
            return None
        return cls.collection().find_one({"email": email.strip().lower()})

    @classmethod
    def email_exists(cls, email):
        return cls.get_by_email(email) is not None

    @staticmethod
    def check_password(user, password) -> bool:
        stored_hash = (user or {}).get("password")
        if not stored_hash or not password:
            return False
        try:
            return bcrypt.checkpw(password.encode("utf-8"), stored_hash.encode("utf-8"))
        except ValueError as e:
            Log.warning(f"[user_model.py][User][check_password] malformed hash for {user.get('_id')}: {e}")
            return False

    @classmethod
    def assign_plan(cls, user_id, plan, start_date, end_date):
        """
        Point the user at `plan`. Returns the stored plan reference, or None
        when the user does not exist.
        """
        plan_ref = {
            "id": str(plan.get("_id") or plan.get("slug")),
            "slug": plan.get("slug"),
            "name": plan.get("name"),
            "active": True,
            "start_date": start_date,
            "end_date": end_date,
        }
        matched = cls.update(user_id, plan=plan_ref)
        return plan_ref if matched else None

    @classmethod
    def record_login(cls, user_id):
        cls.collection().update_one(
            {"_id": to_object_id(user_id)},
            {"$set": {"last_login": datetime.utcnow()}},
        )

    @classmethod
    def plan_subscriber_counts(cls):
        """
        {plan_slug: active user count} for users holding an active plan
        reference, plus the number of users without one.
        """
        pipeline = [
            {"$match": {"plan.active": True}},
            {"$group": {"_id": "$plan.slug", "subscribers": {"$sum": 1}}},
        ]
        counts = {row["_id"]: row["subscribers"] for row in cls.collection().aggregate(pipeline)}
        total_users = cls.collection().count_documents({})
        with_plan = sum(counts.values())
        return counts, total_users - with_plan, total_users

    @classmethod
    def create_indexes(cls):
        cls.collection().create_index("email", unique=True)
        cls.collection().create_index("plan.slug")
