# services/coupon_service.py

import random
from datetime import datetime

from ..models.coupon_model import Coupon
from ..utils.logger import Log


class CouponValidationError(Exception):
    def __init__(self, status_code, message, meta=None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.meta = meta or {}


class CouponService:
    """Coupon code generation and checkout-time validation."""

    # no confusing chars like O, 0, I, 1
    CODE_CHARS = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"

    @staticmethod
    def generate_code(length=8, prefix=""):
        random_part = "".join(random.choices(CouponService.CODE_CHARS, k=length))
        return f"{prefix}{random_part}".upper()

    @staticmethod
    def compute_discount(coupon, order_total):
        order_total = float(order_total or 0)
        value = float(coupon.get("value") or 0)
        coupon_type = coupon.get("type")

        if coupon_type == Coupon.TYPE_PERCENT:
            return round(order_total * value / 100, 2)
        if coupon_type == Coupon.TYPE_FIXED:
            return round(min(value, order_total), 2)
        # free shipping is applied by the checkout, not as an amount
        return 0.0

    @staticmethod
    def validate(owner_id, code, order_total=0.0, product_ids=None, now=None):
        """
        Check a coupon of `owner_id`'s store against an order.

        Returns {"valid": True, "coupon": {...}, "discount": float} or raises
        CouponValidationError carrying "NOT_FOUND" or "BAD_REQUEST".
        """
        log_tag = f"[coupon_service.py][CouponService][validate][{owner_id}][{code}]"
        now = now or datetime.utcnow()
        product_ids = [str(p) for p in (product_ids or [])]

        coupon = Coupon.get_active_by_code(owner_id, code)
        if not coupon:
            raise CouponValidationError("NOT_FOUND", "Coupon not found or inactive")

        start, end = coupon.get("start_date"), coupon.get("expires_at")
        if (isinstance(start, datetime) and now < start) or (isinstance(end, datetime) and now > end):
            raise CouponValidationError("BAD_REQUEST", "Coupon is outside its validity period")

        max_uses = coupon.get("max_uses")
        if max_uses and int(coupon.get("uses") or 0) >= int(max_uses):
            raise CouponValidationError("BAD_REQUEST", "Coupon usage limit reached")

        min_order = coupon.get("min_order_value")
        if min_order and float(order_total or 0) < float(min_order):
            raise CouponValidationError(
                "BAD_REQUEST",
                f"Minimum order value for this coupon is {float(min_order):.2f}",
                meta={"min_order_value": float(min_order)},
            )

        eligible = [str(p) for p in (coupon.get("product_ids") or [])]
        if eligible and not any(p in eligible for p in product_ids):
            raise CouponValidationError("BAD_REQUEST", "Coupon is not valid for the selected products")

        discount = CouponService.compute_discount(coupon, order_total)
        Log.info(f"{log_tag} valid, discount={discount}")

        return {
            "valid": True,
            "coupon": {
                "_id": coupon["_id"],
                "code": coupon.get("code"),
                "type": coupon.get("type"),
                "value": coupon.get("value"),
                "description": coupon.get("description"),
            },
            "discount": discount,
        }
