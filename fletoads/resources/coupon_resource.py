# resources/coupon_resource.py
import re

from flask import g, request
from flask.views import MethodView

from ..models.coupon_model import Coupon
from ..schemas.coupon_schema import CouponSchema, CouponUpdateSchema, CouponValidateSchema
from ..security.auth import token_required
from ..services.coupon_service import CouponService, CouponValidationError
from ..utils.blueprint import Blueprint
from ..utils.helpers import owner_scope, pagination_args, request_log_tag, status_filter
from ..utils.json_response import prepared_response
from ..utils.logger import Log
from ..utils.mongo_helpers import to_naive_utc, to_object_id

blp_coupon = Blueprint("coupons", __name__, description="Discount coupons")

DATE_FIELDS = ("start_date", "expires_at")
MAX_CODE_ATTEMPTS = 5


def _prepare(json_data):
    for key in DATE_FIELDS:
        if key in json_data:
            json_data[key] = to_naive_utc(json_data[key])
    if "product_ids" in json_data:
        json_data["product_ids"] = [to_object_id(p) for p in json_data["product_ids"]]
    if json_data.get("code"):
        json_data["code"] = json_data["code"].strip().upper()
    return json_data


def _unique_code(owner_id):
    for _ in range(MAX_CODE_ATTEMPTS):
        code = CouponService.generate_code()
        if not Coupon.code_exists(owner_id, code):
            return code
    return None


@blp_coupon.route("/cupons", methods=["GET", "POST"])
class Coupons(MethodView):
    @token_required
    def get(self):
        log_tag = request_log_tag("coupon_resource.py", "Coupons", "get")
        page, per_page = pagination_args()

        query = status_filter()
        search = (request.args.get("search") or "").strip()
        if search:
            query["code"] = {"$regex": re.escape(search.upper())}

        try:
            result = Coupon.get_all(g.current_user["_id"], query=query, page=page, per_page=per_page)
        except Exception as e:
            Log.error(f"{log_tag} Error listing coupons: {e}")
            return prepared_response(False, "INTERNAL_SERVER_ERROR", "Failed to retrieve coupons")

        return prepared_response(True, "OK", "Coupons retrieved successfully", data=result)

    @token_required
    @blp_coupon.arguments(CouponSchema, location="json")
    def post(self, json_data):
        """Create a coupon; a random code is generated when none is given."""
        log_tag = request_log_tag("coupon_resource.py", "Coupons", "post")
        user = g.current_user
        json_data = _prepare(json_data)

        if json_data.get("code"):
            if Coupon.code_exists(user["_id"], json_data["code"]):
                Log.info(f"{log_tag} duplicate code {json_data['code']}")
                return prepared_response(False, "CONFLICT", "A coupon with this code already exists")
        else:
            json_data["code"] = _unique_code(user["_id"])
            if json_data["code"] is None:
                return prepared_response(False, "INTERNAL_SERVER_ERROR", "Could not generate a unique coupon code")

        try:
            coupon_id = Coupon(owner_id=user["_id"], store_id=user.get("store_id"), **json_data).save()
        except Exception as e:
            Log.error(f"{log_tag} Error creating coupon: {e}")
            return prepared_response(False, "INTERNAL_SERVER_ERROR", "Failed to create coupon")

        Log.info(f"{log_tag} coupon {json_data['code']} created")
        return prepared_response(True, "CREATED", "Coupon created successfully", data=Coupon.get_by_id(coupon_id))


@blp_coupon.route("/cupons/validar", methods=["POST"])
class ValidateCoupon(MethodView):
    @token_required
    @blp_coupon.arguments(CouponValidateSchema, location="json")
    def post(self, json_data):
        """Check a code against an order of the caller's store."""
        log_tag = request_log_tag("coupon_resource.py", "ValidateCoupon", "post", code=json_data["code"])

        try:
            result = CouponService.validate(
                g.current_user["_id"],
                json_data["code"],
                order_total=json_data.get("order_total"),
                product_ids=json_data.get("product_ids"),
            )
        except CouponValidationError as e:
            Log.info(f"{log_tag} rejected: {e.message}")
            return prepared_response(False, e.status_code, e.message, errors=e.meta or None)

        return prepared_response(True, "OK", "Coupon is valid", data=result)


@blp_coupon.route("/cupons/<string:coupon_id>", methods=["GET", "PUT", "DELETE"])
class CouponDetail(MethodView):
    @token_required
    def get(self, coupon_id):
        coupon = Coupon.get_by_id(coupon_id, owner_scope())
        if not coupon:
            return prepared_response(False, "NOT_FOUND", "Coupon not found")
        return prepared_response(True, "OK", "Coupon retrieved successfully", data=coupon)

    @token_required
    @blp_coupon.arguments(CouponUpdateSchema, location="json")
    def put(self, json_data, coupon_id):
        log_tag = request_log_tag("coupon_resource.py", "CouponDetail", "put", coupon=coupon_id)

        existing = Coupon.get_by_id(coupon_id, owner_scope())
        if not existing:
            return prepared_response(False, "NOT_FOUND", "Coupon not found")

        updates = _prepare(json_data)
        if updates.get("code") and Coupon.code_exists(existing["owner_id"], updates["code"], exclude_id=existing["_id"]):
            return prepared_response(False, "CONFLICT", "A coupon with this code already exists")

        coupon_type = updates.get("type", existing.get("type"))
        value = updates.get("value", existing.get("value") or 0)
        if coupon_type == Coupon.TYPE_PERCENT and value > 100:
            return prepared_response(
                False, "BAD_REQUEST", "Percentage coupons cannot exceed 100",
                errors={"value": ["Percentage coupons cannot exceed 100"]},
            )

        try:
            Coupon.update(existing["_id"], **updates)
        except Exception as e:
            Log.error(f"{log_tag} Error updating coupon: {e}")
            return prepared_response(False, "INTERNAL_SERVER_ERROR", "Failed to update coupon")

        return prepared_response(True, "OK", "Coupon updated successfully", data=Coupon.get_by_id(existing["_id"]))

    @token_required
    def delete(self, coupon_id):
        log_tag = request_log_tag("coupon_resource.py", "CouponDetail", "delete", coupon=coupon_id)

        existing = Coupon.get_by_id(coupon_id, owner_scope())
        if not existing:
            return prepared_response(False, "NOT_FOUND", "Coupon not found")

        Coupon.delete(existing["_id"])
        Log.info(f"{log_tag} coupon deleted")
        return prepared_response(True, "OK", "Coupon deleted successfully")
