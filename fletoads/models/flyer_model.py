from datetime import datetime

from ..constants.service_code import COLLECTIONS
from .base_model import BaseModel


class Flyer(BaseModel):
    """
    Digital flyer ("panfleto").

    start_date/end_date describe the validity window shown to customers;
    nothing is deleted when a flyer expires.
    """

    collection_name = COLLECTIONS["FLYERS"]

    def __init__(self, owner_id, title, store_id=None, size_bytes=0, active=True, product_ids=None, **kwargs):
        super().__init__(owner_id=owner_id, store_id=store_id, **kwargs)
        self.title = title
        self.size_bytes = int(size_bytes or 0)
        self.active = active
        self.product_ids = product_ids or []

    @staticmethod
    def is_current(flyer, now=None):
        now = now or datetime.utcnow()
        start, end = flyer.get("start_date"), flyer.get("end_date")
        if isinstance(start, datetime) and now < start:
            return False
        if isinstance(end, datetime) and now > end:
            return False
        return True
