# fletoads/utils/extensions.py

from flask import request, g, has_request_context
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from .logger import Log


def _get_client_ip():
    """Safely get client IP, returns 'unknown' if outside request context."""
    if has_request_context():
        return get_remote_address() or "unknown"
    return "unknown"


def log_rate_limit_breach(request_limit):
    """
    Called by Flask-Limiter when any rate limit is exceeded.
    """
    client_ip = _get_client_ip()
    current_user = getattr(g, "current_user", None) or {}
    user_id = current_user.get("_id") or "anonymous"

    limit_str = str(getattr(request_limit, "limit", "unknown"))

    Log.warning(
        f"[RATE_LIMIT_BREACH][{client_ip}] "
        f"user={user_id}, limit={limit_str}, "
        f"method={request.method}, path={request.path}, endpoint={request.endpoint or 'unknown'}"
    )


# Storage and enablement come from RATELIMIT_* config keys at init_app time
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[],
    on_breach=log_rate_limit_breach,
)
