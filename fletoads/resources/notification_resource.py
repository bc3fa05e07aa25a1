# resources/notification_resource.py
from flask import g, request
from flask.views import MethodView

from ..models.notification_model import Notification
from ..security.auth import token_required
from ..utils.blueprint import Blueprint
from ..utils.helpers import request_log_tag
from ..utils.json_response import prepared_response
from ..utils.logger import Log

blp_notification = Blueprint("notifications", __name__, description="In-app notifications")


@blp_notification.route("/notificacoes", methods=["GET"])
class Notifications(MethodView):
    @token_required
    def get(self):
        """Caller's notifications, newest first; ?unread=true for unread only."""
        log_tag = request_log_tag("notification_resource.py", "Notifications", "get")
        unread_only = request.args.get("unread") == "true"
        limit = min(max(request.args.get("limit", 50, type=int) or 50, 1), 200)

        try:
            items = Notification.list_for_user(g.current_user["_id"], unread_only=unread_only, limit=limit)
        except Exception as e:
            Log.error(f"{log_tag} Error listing notifications: {e}")
            return prepared_response(False, "INTERNAL_SERVER_ERROR", "Failed to retrieve notifications")

        return prepared_response(True, "OK", "Notifications retrieved successfully", data=items)


@blp_notification.route("/notificacoes/<string:notification_id>/lida", methods=["PUT"])
class MarkNotificationRead(MethodView):
    @token_required
    def put(self, notification_id):
        if not Notification.mark_read(notification_id, g.current_user["_id"]):
            return prepared_response(False, "NOT_FOUND", "Notification not found")
        return prepared_response(True, "OK", "Notification marked as read")
