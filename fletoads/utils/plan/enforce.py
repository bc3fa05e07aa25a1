# fletoads/utils/plan/enforce.py
from functools import wraps

from flask import current_app, g

from ...extensions.db import get_db
from ..json_response import prepared_response
from ..logger import Log
from .quota_enforcer import PlanLimitError, QuotaEnforcer


def _enforcer(owner_id):
    return QuotaEnforcer(
        get_db(),
        owner_id,
        enforce=current_app.config.get("ENFORCE_PLAN_LIMITS", False),
    )


def enforce_resource_limit(resource, qty=1, when=None):
    """
    Reserve `qty` units of `resource` for g.current_user before running the
    create handler. The reservation is released if the handler raises or
    returns an error status.

    when: optional callable (args, kwargs) -> bool; no reservation is made
      when it returns False (e.g. creating an inactive product).
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            user = g.get("current_user") or {}
            owner_id = user.get("_id")

            if not owner_id:
                return prepared_response(False, "UNAUTHORIZED", "Authentication required.")

            if callable(when) and not when(args, kwargs):
                return fn(*args, **kwargs)

            enforcer = _enforcer(owner_id)

            try:
                enforcer.reserve(resource, qty=qty)
            except PlanLimitError as e:
                Log.info(f"[enforce.py][{fn.__name__}][user:{owner_id}] {e.code}: {e.meta}")
                return prepared_response(False, "FORBIDDEN", e.message, errors=e.meta)

            try:
                rv = fn(*args, **kwargs)
            except Exception:
                enforcer.release(resource, qty=qty)
                raise

            status = rv[1] if isinstance(rv, tuple) and len(rv) > 1 else 200
            if isinstance(status, int) and status >= 400:
                enforcer.release(resource, qty=qty)
            return rv
        return wrapper
    return decorator


def reserve_resource(owner_id, resource, qty=1):
    """Reserve outside a create handler (e.g. re-activating a record). Raises PlanLimitError."""
    return _enforcer(owner_id).reserve(resource, qty=qty)


def release_resource(owner_id, resource, qty=1):
    """Counterpart of a delete or a deactivation."""
    QuotaEnforcer(get_db(), owner_id, plan={"limits": {}}).release(resource, qty=qty)
