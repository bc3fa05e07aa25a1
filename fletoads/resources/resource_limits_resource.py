# resources/resource_limits_resource.py
from flask import g
from flask.views import MethodView

from ..extensions.db import get_db
from ..models.user_model import User
from ..security.auth import is_admin, token_required
from ..utils.blueprint import Blueprint
from ..utils.helpers import request_log_tag
from ..utils.json_response import prepared_response
from ..utils.logger import Log
from ..utils.mongo_helpers import to_object_id
from ..utils.plan.resource_limits import ResourceLimitService

blp_resource_limits = Blueprint("resource_limits", __name__, description="Plan usage versus ceilings")


@blp_resource_limits.route("/usuario/resource-limits", methods=["GET"])
class MyResourceLimits(MethodView):
    @token_required
    def get(self):
        """Usage of the caller's plan-tracked resources."""
        log_tag = request_log_tag("resource_limits_resource.py", "MyResourceLimits", "get")

        try:
            result = ResourceLimitService(get_db()).get_user_resource_limits(g.current_user["_id"])
        except Exception as e:
            Log.error(f"{log_tag} Error computing resource limits: {e}")
            return prepared_response(False, "INTERNAL_SERVER_ERROR", "Failed to compute resource limits")

        return prepared_response(True, "OK", "Resource limits retrieved successfully", data=result)


@blp_resource_limits.route("/usuarios/<string:user_id>/usage", methods=["GET"])
class UserUsage(MethodView):
    @token_required
    def get(self, user_id):
        """Usage of any user; only the user themselves or an admin may look."""
        log_tag = request_log_tag("resource_limits_resource.py", "UserUsage", "get", target_user=user_id)

        if g.current_user["_id"] != user_id and not is_admin():
            Log.info(f"{log_tag} forbidden")
            return prepared_response(False, "FORBIDDEN", "You can only view your own usage")

        if to_object_id(user_id) is None:
            return prepared_response(False, "BAD_REQUEST", "Invalid user id")

        if not User.get_by_id(user_id):
            return prepared_response(False, "NOT_FOUND", "User not found")

        try:
            result = ResourceLimitService(get_db()).get_user_resource_limits(user_id)
        except Exception as e:
            Log.error(f"{log_tag} Error computing usage: {e}")
            return prepared_response(False, "INTERNAL_SERVER_ERROR", "Failed to compute usage")

        return prepared_response(True, "OK", "Usage retrieved successfully", data=result)
