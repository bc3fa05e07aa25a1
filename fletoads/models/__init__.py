from .base_model import BaseModel
from .coupon_model import Coupon
from .flyer_model import Flyer
from .integration_model import Integration
from .notification_model import Notification
from .plan_model import Plan
from .product_model import Product
from .store_model import Store
from .user_model import User

__all__ = [
    "BaseModel",
    "Coupon",
    "Flyer",
    "Integration",
    "Notification",
    "Plan",
    "Product",
    "Store",
    "User",
]
