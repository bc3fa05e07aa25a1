# resources/auth_resource.py
from flask import g
from flask.views import MethodView

from ..constants.service_code import AUTHENTICATION_MESSAGES
from ..models.user_model import User
from ..schemas.auth_schema import LoginSchema, RegisterSchema
from ..security.auth import generate_access_token, token_required
from ..utils.blueprint import Blueprint
from ..utils.extensions import limiter
from ..utils.helpers import request_log_tag
from ..utils.json_response import prepared_response
from ..utils.logger import Log

blp_auth = Blueprint("auth", __name__, description="Registration and session tokens")


@blp_auth.route("/auth/register", methods=["POST"])
class Register(MethodView):
    decorators = [limiter.limit("20 per hour")]

    @blp_auth.arguments(RegisterSchema, location="json")
    def post(self, json_data):
        """Create a merchant account on the free tier."""
        log_tag = request_log_tag("auth_resource.py", "Register", "post", email=json_data["email"])

        if User.email_exists(json_data["email"]):
            Log.info(f"{log_tag} email already registered")
            return prepared_response(False, "CONFLICT", "Email already registered")

        try:
            user_id = User(**json_data).save()
        except Exception as e:
            Log.error(f"{log_tag} error creating user: {e}")
            return prepared_response(False, "INTERNAL_SERVER_ERROR", "Failed to create account")

        Log.info(f"{log_tag} user {user_id} registered")
        return prepared_response(
            True,
            "CREATED",
            "Account created successfully",
            data=User.public_view(User.get_by_id(user_id)),
        )


@blp_auth.route("/auth/login", methods=["POST"])
class Login(MethodView):
    decorators = [limiter.limit("10 per minute")]

    @blp_auth.arguments(LoginSchema, location="json")
    def post(self, json_data):
        """Exchange credentials for a bearer token."""
        log_tag = request_log_tag("auth_resource.py", "Login", "post", email=json_data["email"])

        user = User.get_by_email(json_data["email"])
        if not user or not User.check_password(user, json_data["password"]):
            Log.info(f"{log_tag} invalid credentials")
            return prepared_response(False, "UNAUTHORIZED", AUTHENTICATION_MESSAGES["INVALID_CREDENTIALS"])

        if user.get("active") is False:
            Log.info(f"{log_tag} inactive account")
            return prepared_response(False, "FORBIDDEN", "Account is inactive")

        token, expires_in = generate_access_token(user)
        User.record_login(user["_id"])

        return prepared_response(
            True,
            "OK",
            "Login successful",
            data={
                "access_token": token,
                "token_type": "Bearer",
                "expires_in": expires_in,
                "user": User.public_view(user),
            },
        )


@blp_auth.route("/auth/me", methods=["GET"])
class Me(MethodView):
    @token_required
    def get(self):
        return prepared_response(True, "OK", "Current user", data=g.current_user)
