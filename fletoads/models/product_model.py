from ..constants.service_code import COLLECTIONS
from .base_model import BaseModel


class Product(BaseModel):
    collection_name = COLLECTIONS["PRODUCTS"]

    def __init__(self, owner_id, name, price, store_id=None, size_bytes=0, active=True, **kwargs):
        super().__init__(owner_id=owner_id, store_id=store_id, **kwargs)
        self.name = name
        self.price = float(price)
        self.size_bytes = int(size_bytes or 0)
        self.active = active
