# resources/store_resource.py
import re

from flask import g, request
from flask.views import MethodView

from ..models.store_model import Store
from ..models.user_model import User
from ..schemas.store_schema import StoreSchema
from ..security.auth import token_required
from ..utils.blueprint import Blueprint
from ..utils.helpers import pagination_args, request_log_tag
from ..utils.json_response import prepared_response
from ..utils.logger import Log
from ..utils.mongo_helpers import normalize_name

blp_store = Blueprint("stores", __name__, description="Stores and public storefronts")


@blp_store.route("/lojas", methods=["GET"])
class PublicStores(MethodView):
    def get(self):
        """Active stores, newest first; ?search= matches the name."""
        page, per_page = pagination_args()

        query = {"active": True}
        search = (request.args.get("search") or "").strip()
        if search:
            query["normalized_name"] = {"$regex": re.escape(normalize_name(search))}

        try:
            result = Store.get_all(query=query, page=page, per_page=per_page)
        except Exception as e:
            Log.error(f"[store_resource.py][PublicStores][get] Error: {e}")
            return prepared_response(False, "INTERNAL_SERVER_ERROR", "Failed to retrieve stores")

        for store in result["items"]:
            store.pop("owner_id", None)
        return prepared_response(True, "OK", "Stores retrieved successfully", data=result)


@blp_store.route("/lojas/<string:id_or_slug>", methods=["GET"])
class PublicStore(MethodView):
    def get(self, id_or_slug):
        """Storefront lookup by id, slug or name."""
        store = Store.find_public(id_or_slug)
        if not store:
            return prepared_response(False, "NOT_FOUND", "Store not found")
        store.pop("owner_id", None)
        return prepared_response(True, "OK", "Store retrieved successfully", data=store)


@blp_store.route("/loja", methods=["GET", "PUT"])
class MyStore(MethodView):
    @token_required
    def get(self):
        store = Store.get_by_owner(g.current_user["_id"])
        if not store:
            return prepared_response(False, "NOT_FOUND", "You have not set up a store yet")
        return prepared_response(True, "OK", "Store retrieved successfully", data=store)

    @token_required
    @blp_store.arguments(StoreSchema, location="json")
    def put(self, json_data):
        """Create the caller's store on first call, update it afterwards."""
        log_tag = request_log_tag("store_resource.py", "MyStore", "put")
        user_id = g.current_user["_id"]

        existing = Store.get_by_owner(user_id)
        if not existing and not json_data.get("name"):
            return prepared_response(
                False, "BAD_REQUEST", "Store name is required",
                errors={"name": ["Store name is required"]},
            )

        slug = json_data.get("slug")
        if not slug and json_data.get("name"):
            slug = normalize_name(json_data["name"])
        if slug and Store.slug_taken(slug, exclude_owner_id=user_id):
            Log.info(f"{log_tag} slug {slug} already taken")
            return prepared_response(False, "CONFLICT", "This store address is already in use")

        try:
            store, created = Store.upsert_for_owner(user_id, **json_data)
            if created:
                User.update(user_id, store_id=store["_id"])
        except Exception as e:
            Log.error(f"{log_tag} Error saving store: {e}")
            return prepared_response(False, "INTERNAL_SERVER_ERROR", "Failed to save store")

        if created:
            Log.info(f"{log_tag} store {store['_id']} created")
            return prepared_response(True, "CREATED", "Store created successfully", data=store)
        return prepared_response(True, "OK", "Store updated successfully", data=store)
