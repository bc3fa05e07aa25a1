# resources/product_resource.py
import re

from flask import g, request
from flask.views import MethodView

from ..models.product_model import Product
from ..schemas.product_schema import ProductSchema, ProductUpdateSchema
from ..security.auth import token_required
from ..utils.blueprint import Blueprint
from ..utils.helpers import owner_scope, pagination_args, request_log_tag, status_filter
from ..utils.json_response import prepared_response
from ..utils.logger import Log
from ..utils.plan.enforce import enforce_resource_limit, release_resource, reserve_resource
from ..utils.plan.quota_enforcer import PlanLimitError

blp_product = Blueprint("products", __name__, description="Store products")


def _creates_active(args, kwargs):
    # args: (self, json_data)
    json_data = args[1] if len(args) > 1 else {}
    return bool(json_data.get("active", True))


@blp_product.route("/produtos", methods=["GET", "POST"])
class Products(MethodView):
    @token_required
    def get(self):
        """List the caller's products; ?status=ativo|inativo, ?search=, ?category=."""
        log_tag = request_log_tag("product_resource.py", "Products", "get")
        page, per_page = pagination_args()

        query = status_filter()
        search = (request.args.get("search") or "").strip()
        if search:
            query["name"] = {"$regex": re.escape(search), "$options": "i"}
        category = (request.args.get("category") or "").strip()
        if category:
            query["category"] = category

        try:
            result = Product.get_all(g.current_user["_id"], query=query, page=page, per_page=per_page)
        except Exception as e:
            Log.error(f"{log_tag} Error listing products: {e}")
            return prepared_response(False, "INTERNAL_SERVER_ERROR", "Failed to retrieve products")

        return prepared_response(True, "OK", "Products retrieved successfully", data=result)

    @token_required
    @blp_product.arguments(ProductSchema, location="json")
    @enforce_resource_limit("products", when=_creates_active)
    def post(self, json_data):
        log_tag = request_log_tag("product_resource.py", "Products", "post")
        user = g.current_user

        try:
            product_id = Product(owner_id=user["_id"], store_id=user.get("store_id"), **json_data).save()
        except Exception as e:
            Log.error(f"{log_tag} Error creating product: {e}")
            return prepared_response(False, "INTERNAL_SERVER_ERROR", "Failed to create product")

        Log.info(f"{log_tag} product {product_id} created")
        return prepared_response(True, "CREATED", "Product created successfully", data=Product.get_by_id(product_id))


@blp_product.route("/produtos/<string:product_id>", methods=["GET", "PUT", "DELETE"])
class ProductDetail(MethodView):
    @token_required
    def get(self, product_id):
        product = Product.get_by_id(product_id, owner_scope())
        if not product:
            return prepared_response(False, "NOT_FOUND", "Product not found")
        return prepared_response(True, "OK", "Product retrieved successfully", data=product)

    @token_required
    @blp_product.arguments(ProductUpdateSchema, location="json")
    def put(self, json_data, product_id):
        """Update a product. Re-activating counts against the plan ceiling again."""
        log_tag = request_log_tag("product_resource.py", "ProductDetail", "put", product=product_id)

        existing = Product.get_by_id(product_id, owner_scope())
        if not existing:
            return prepared_response(False, "NOT_FOUND", "Product not found")

        price = json_data.get("price", existing.get("price"))
        promo = json_data.get("promotional_price", existing.get("promotional_price"))
        if price is not None and promo is not None and promo > price:
            return prepared_response(
                False, "BAD_REQUEST", "promotional_price must not exceed price",
                errors={"promotional_price": ["promotional_price must not exceed price"]},
            )

        was_active = bool(existing.get("active", True))
        now_active = bool(json_data.get("active", was_active))
        owner_id = existing["owner_id"]

        if now_active and not was_active:
            try:
                reserve_resource(owner_id, "products")
            except PlanLimitError as e:
                Log.info(f"{log_tag} {e.code}: {e.meta}")
                return prepared_response(False, "FORBIDDEN", e.message, errors=e.meta)

        try:
            Product.update(existing["_id"], **json_data)
        except Exception as e:
            Log.error(f"{log_tag} Error updating product: {e}")
            if now_active and not was_active:
                release_resource(owner_id, "products")
            return prepared_response(False, "INTERNAL_SERVER_ERROR", "Failed to update product")

        if was_active and not now_active:
            release_resource(owner_id, "products")

        return prepared_response(True, "OK", "Product updated successfully", data=Product.get_by_id(existing["_id"]))

    @token_required
    def delete(self, product_id):
        log_tag = request_log_tag("product_resource.py", "ProductDetail", "delete", product=product_id)

        existing = Product.get_by_id(product_id, owner_scope())
        if not existing:
            return prepared_response(False, "NOT_FOUND", "Product not found")

        try:
            Product.delete(existing["_id"])
            if existing.get("active", True):
                release_resource(existing["owner_id"], "products")
        except Exception as e:
            Log.error(f"{log_tag} Error deleting product: {e}")
            return prepared_response(False, "INTERNAL_SERVER_ERROR", "Failed to delete product")

        Log.info(f"{log_tag} product deleted")
        return prepared_response(True, "OK", "Product deleted successfully")
