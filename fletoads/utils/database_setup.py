# utils/database_setup.py

from ..constants.service_code import COLLECTIONS
from ..extensions.db import get_db
from ..models import Coupon, Flyer, Integration, Notification, Plan, Product, Store, User
from ..utils.logger import Log

INDEXED_MODELS = (User, Store, Plan, Flyer, Product, Coupon, Integration, Notification)


def setup_database_indexes():
    """
    Create database indexes on startup. create_index is a no-op for indexes
    that already exist.
    """
    log_tag = "[database_setup.py][setup_database_indexes]"

    Log.info(f"{log_tag} Creating database indexes...")

    try:
        for model in INDEXED_MODELS:
            model.create_indexes()

        # one running counter per (owner, resource)
        get_db().get_collection(COLLECTIONS["RESOURCE_COUNTERS"]).create_index(
            [("owner_id", 1), ("resource", 1)], unique=True
        )
        Log.info(f"{log_tag} All indexes created successfully")
    except Exception as e:
        Log.error(f"{log_tag} Error: {str(e)}")
