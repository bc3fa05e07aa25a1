# resources/integration_resource.py
from flask import g, request
from flask.views import MethodView

from ..models.integration_model import Integration
from ..schemas.integration_schema import IntegrationSchema, IntegrationUpdateSchema
from ..security.auth import token_required
from ..utils.blueprint import Blueprint
from ..utils.helpers import owner_scope, pagination_args, request_log_tag, status_filter
from ..utils.json_response import prepared_response
from ..utils.logger import Log
from ..utils.plan.enforce import enforce_resource_limit, release_resource, reserve_resource
from ..utils.plan.quota_enforcer import PlanLimitError

blp_integration = Blueprint("integrations", __name__, description="Third-party integrations")


def _creates_active(args, kwargs):
    json_data = args[1] if len(args) > 1 else {}
    return bool(json_data.get("active", True))


@blp_integration.route("/integracoes", methods=["GET", "POST"])
class Integrations(MethodView):
    @token_required
    def get(self):
        log_tag = request_log_tag("integration_resource.py", "Integrations", "get")
        page, per_page = pagination_args()

        query = status_filter()
        integration_type = (request.args.get("type") or "").strip().lower()
        if integration_type:
            query["type"] = integration_type

        try:
            result = Integration.get_all(g.current_user["_id"], query=query, page=page, per_page=per_page)
        except Exception as e:
            Log.error(f"{log_tag} Error listing integrations: {e}")
            return prepared_response(False, "INTERNAL_SERVER_ERROR", "Failed to retrieve integrations")

        return prepared_response(True, "OK", "Integrations retrieved successfully", data=result)

    @token_required
    @blp_integration.arguments(IntegrationSchema, location="json")
    @enforce_resource_limit("integrations", when=_creates_active)
    def post(self, json_data):
        log_tag = request_log_tag("integration_resource.py", "Integrations", "post", type=json_data["type"])
        user = g.current_user

        try:
            integration_id = Integration(owner_id=user["_id"], store_id=user.get("store_id"), **json_data).save()
        except Exception as e:
            Log.error(f"{log_tag} Error creating integration: {e}")
            return prepared_response(False, "INTERNAL_SERVER_ERROR", "Failed to create integration")

        Log.info(f"{log_tag} integration {integration_id} created")
        return prepared_response(
            True, "CREATED", "Integration created successfully", data=Integration.get_by_id(integration_id)
        )


@blp_integration.route("/integracoes/<string:integration_id>", methods=["GET", "PUT", "DELETE"])
class IntegrationDetail(MethodView):
    @token_required
    def get(self, integration_id):
        integration = Integration.get_by_id(integration_id, owner_scope())
        if not integration:
            return prepared_response(False, "NOT_FOUND", "Integration not found")
        return prepared_response(True, "OK", "Integration retrieved successfully", data=integration)

    @token_required
    @blp_integration.arguments(IntegrationUpdateSchema, location="json")
    def put(self, json_data, integration_id):
        """Rename, reconfigure or toggle an integration."""
        log_tag = request_log_tag("integration_resource.py", "IntegrationDetail", "put", integration=integration_id)

        existing = Integration.get_by_id(integration_id, owner_scope())
        if not existing:
            return prepared_response(False, "NOT_FOUND", "Integration not found")

        was_active = bool(existing.get("active", True))
        now_active = bool(json_data.get("active", was_active))
        owner_id = existing["owner_id"]

        if now_active and not was_active:
            try:
                reserve_resource(owner_id, "integrations")
            except PlanLimitError as e:
                Log.info(f"{log_tag} {e.code}: {e.meta}")
                return prepared_response(False, "FORBIDDEN", e.message, errors=e.meta)

        try:
            Integration.update(existing["_id"], **json_data)
        except Exception as e:
            Log.error(f"{log_tag} Error updating integration: {e}")
            if now_active and not was_active:
                release_resource(owner_id, "integrations")
            return prepared_response(False, "INTERNAL_SERVER_ERROR", "Failed to update integration")

        if was_active and not now_active:
            release_resource(owner_id, "integrations")

        return prepared_response(
            True, "OK", "Integration updated successfully", data=Integration.get_by_id(existing["_id"])
        )

    @token_required
    def delete(self, integration_id):
        log_tag = request_log_tag("integration_resource.py", "IntegrationDetail", "delete", integration=integration_id)

        existing = Integration.get_by_id(integration_id, owner_scope())
        if not existing:
            return prepared_response(False, "NOT_FOUND", "Integration not found")

        try:
            Integration.delete(existing["_id"])
            if existing.get("active", True):
                release_resource(existing["owner_id"], "integrations")
        except Exception as e:
            Log.error(f"{log_tag} Error deleting integration: {e}")
            return prepared_response(False, "INTERNAL_SERVER_ERROR", "Failed to delete integration")

        Log.info(f"{log_tag} integration deleted")
        return prepared_response(True, "OK", "Integration deleted successfully")
