from flask import g, request


def make_log_tag(file, resource, method, ip, user_id, role, **kwargs):
    # Base tag
    log_tag = (
        f"[{file}]"
        f"[{resource}]"
        f"[{method}]"
        f"[ip:{ip}]"
        f"[user:{user_id}]"
        f"[role:{role}]"
    )

    # Append extra context fields
    for key, value in kwargs.items():
        log_tag += f"[{key}:{value}]"

    return log_tag


def request_log_tag(file, resource, method, **kwargs):
    """make_log_tag() filled in from the current request and g.current_user."""
    user = g.get("current_user") or {}
    return make_log_tag(
        file,
        resource,
        method,
        request.remote_addr,
        user.get("_id"),
        user.get("role"),
        **kwargs,
    )


def owner_scope():
    """
    Owner filter for single-record access: None (no restriction) for admins,
    the caller's id otherwise.
    """
    user = g.get("current_user") or {}
    if user.get("role") == "admin":
        return None
    return user.get("_id")


def status_filter(query=None):
    """Apply ?status=ativo|inativo to a listing query."""
    query = dict(query or {})
    status = (request.args.get("status") or "").strip().lower()
    if status == "ativo":
        query["active"] = True
    elif status == "inativo":
        query["active"] = False
    return query


def pagination_args(default_per_page=20, max_per_page=100):
    page = request.args.get("page", 1, type=int) or 1
    per_page = request.args.get("per_page", default_per_page, type=int) or default_per_page
    return max(page, 1), min(max(per_page, 1), max_per_page)
