from datetime import datetime, timedelta, timezone
from functools import wraps

import jwt
from flask import current_app, g, request

from ..constants.service_code import AUTHENTICATION_MESSAGES, ROLES
from ..models.user_model import User
from ..utils.json_response import prepared_response
from ..utils.logger import Log

ALGORITHM = "HS256"


def generate_access_token(user):
    """Signed session token for `user`: (token, expires_in_seconds)."""
    ttl_minutes = int(current_app.config.get("TOKEN_TTL_MINUTES", 60))
    expires_at = datetime.now(timezone.utc) + timedelta(minutes=ttl_minutes)
    token = jwt.encode(
        {
            "user_id": str(user["_id"]),
            "role": user.get("role", ROLES["USER"]),
            "exp": expires_at,
        },
        current_app.config["SECRET_KEY"],
        algorithm=ALGORITHM,
    )
    return token, ttl_minutes * 60


def decode_access_token(token):
    return jwt.decode(token, current_app.config["SECRET_KEY"], algorithms=[ALGORITHM])


def _unauthorized(message):
    return prepared_response(False, "UNAUTHORIZED", message)


def token_required(f):
    @wraps(f)
    def decorated(*args, **kwargs):
        auth_header = request.headers.get("Authorization")
        log_tag = "[auth.py][token_required]"

        if not auth_header or not auth_header.startswith("Bearer "):
            return _unauthorized(AUTHENTICATION_MESSAGES["AUTHENTICATION_REQUIRED"])

        token = auth_header.split(" ", 1)[1].strip()

        try:
            data = decode_access_token(token)
        except jwt.ExpiredSignatureError:
            return _unauthorized(AUTHENTICATION_MESSAGES["TOKEN_EXPIRED"])
        except jwt.InvalidTokenError:
            return _unauthorized(AUTHENTICATION_MESSAGES["INVALID_TOKEN"])

        user = User.get_by_id(data.get("user_id"))
        if not user or user.get("active") is False:
            Log.info(f"{log_tag} token for missing or inactive user {data.get('user_id')}")
            return _unauthorized(AUTHENTICATION_MESSAGES["INVALID_TOKEN"])

        user = User.public_view(user)
        user["_id"] = str(user["_id"])
        # role comes from the database, not the token, so demotions apply at once
        user["role"] = user.get("role") or ROLES["USER"]
        g.current_user = user

        return f(*args, **kwargs)
    return decorated


def is_admin(user=None):
    user = user if user is not None else (g.get("current_user") or {})
    return user.get("role") == ROLES["ADMIN"]


def admin_required(f):
    @wraps(f)
    @token_required
    def decorated(*args, **kwargs):
        if not is_admin():
            Log.info(f"[auth.py][admin_required] user {g.current_user.get('_id')} is not an admin")
            return prepared_response(False, "FORBIDDEN", AUTHENTICATION_MESSAGES["ADMIN_REQUIRED"])
        return f(*args, **kwargs)
    return decorated
