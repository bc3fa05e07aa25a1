# resources/flyer_resource.py
import re

from flask import g, request
from flask.views import MethodView

from ..models.flyer_model import Flyer
from ..schemas.flyer_schema import FlyerSchema, FlyerUpdateSchema
from ..security.auth import token_required
from ..utils.blueprint import Blueprint
from ..utils.helpers import owner_scope, pagination_args, request_log_tag, status_filter
from ..utils.json_response import prepared_response
from ..utils.logger import Log
from ..utils.mongo_helpers import to_naive_utc, to_object_id
from ..utils.plan.enforce import enforce_resource_limit, release_resource

blp_flyer = Blueprint("flyers", __name__, description="Digital flyers (panfletos)")

DATE_FIELDS = ("start_date", "end_date")


def _prepare(json_data):
    for key in DATE_FIELDS:
        if key in json_data:
            json_data[key] = to_naive_utc(json_data[key])
    if "product_ids" in json_data:
        json_data["product_ids"] = [to_object_id(p) for p in json_data["product_ids"]]
    return json_data


@blp_flyer.route("/panfletos", methods=["GET", "POST"])
class Flyers(MethodView):
    @token_required
    def get(self):
        """List the caller's flyers; ?status=ativo|inativo, ?search=, ?vigentes=true."""
        log_tag = request_log_tag("flyer_resource.py", "Flyers", "get")
        page, per_page = pagination_args()

        query = status_filter()
        search = (request.args.get("search") or "").strip()
        if search:
            query["title"] = {"$regex": re.escape(search), "$options": "i"}

        try:
            result = Flyer.get_all(g.current_user["_id"], query=query, page=page, per_page=per_page)
        except Exception as e:
            Log.error(f"{log_tag} Error listing flyers: {e}")
            return prepared_response(False, "INTERNAL_SERVER_ERROR", "Failed to retrieve flyers")

        if request.args.get("vigentes") == "true":
            result["items"] = [f for f in result["items"] if Flyer.is_current(f)]

        return prepared_response(True, "OK", "Flyers retrieved successfully", data=result)

    @token_required
    @blp_flyer.arguments(FlyerSchema, location="json")
    @enforce_resource_limit("flyers")
    def post(self, json_data):
        """Create a flyer."""
        log_tag = request_log_tag("flyer_resource.py", "Flyers", "post")
        user = g.current_user

        try:
            flyer_id = Flyer(
                owner_id=user["_id"],
                store_id=user.get("store_id"),
                **_prepare(json_data),
            ).save()
        except Exception as e:
            Log.error(f"{log_tag} Error creating flyer: {e}")
            return prepared_response(False, "INTERNAL_SERVER_ERROR", "Failed to create flyer")

        Log.info(f"{log_tag} flyer {flyer_id} created")
        return prepared_response(True, "CREATED", "Flyer created successfully", data=Flyer.get_by_id(flyer_id))


@blp_flyer.route("/panfletos/<string:flyer_id>", methods=["GET", "PUT", "DELETE"])
class FlyerDetail(MethodView):
    @token_required
    def get(self, flyer_id):
        flyer = Flyer.get_by_id(flyer_id, owner_scope())
        if not flyer:
            return prepared_response(False, "NOT_FOUND", "Flyer not found")
        return prepared_response(True, "OK", "Flyer retrieved successfully", data=flyer)

    @token_required
    @blp_flyer.arguments(FlyerUpdateSchema, location="json")
    def put(self, json_data, flyer_id):
        log_tag = request_log_tag("flyer_resource.py", "FlyerDetail", "put", flyer=flyer_id)

        existing = Flyer.get_by_id(flyer_id, owner_scope())
        if not existing:
            return prepared_response(False, "NOT_FOUND", "Flyer not found")

        updates = _prepare(json_data)
        start = updates.get("start_date", existing.get("start_date"))
        end = updates.get("end_date", existing.get("end_date"))
        if start and end and end < start:
            return prepared_response(
                False, "BAD_REQUEST", "end_date must not be before start_date",
                errors={"end_date": ["end_date must not be before start_date"]},
            )

        if updates:
            try:
                Flyer.update(existing["_id"], **updates)
            except Exception as e:
                Log.error(f"{log_tag} Error updating flyer: {e}")
                return prepared_response(False, "INTERNAL_SERVER_ERROR", "Failed to update flyer")

        return prepared_response(True, "OK", "Flyer updated successfully", data=Flyer.get_by_id(existing["_id"]))

    @token_required
    def delete(self, flyer_id):
        log_tag = request_log_tag("flyer_resource.py", "FlyerDetail", "delete", flyer=flyer_id)

        existing = Flyer.get_by_id(flyer_id, owner_scope())
        if not existing:
            return prepared_response(False, "NOT_FOUND", "Flyer not found")

        try:
            Flyer.delete(existing["_id"])
            release_resource(existing["owner_id"], "flyers")
        except Exception as e:
            Log.error(f"{log_tag} Error deleting flyer: {e}")
            return prepared_response(False, "INTERNAL_SERVER_ERROR", "Failed to delete flyer")

        Log.info(f"{log_tag} flyer deleted")
        return prepared_response(True, "OK", "Flyer deleted successfully")
