# fletoads/utils/plan/resource_limits.py
from __future__ import annotations

from typing import Any, Dict, Optional

from ..logger import Log
from ..mongo_helpers import to_object_id
from .limits_map import RESOURCE_RULES, TRACKED_RESOURCES
from .plan_catalog import PlanCatalog
from .plan_resolver import PlanResolver


def normalize_limit(value) -> Optional[int]:
    """Plan ceiling as an int, or None for unlimited (-1 / None / garbage)."""
    if value is None:
        return None
    try:
        value = int(value)
    except (TypeError, ValueError):
        return None
    if value < 0:
        return None
    return value


def build_usage(used: int, limit) -> Dict[str, Any]:
    limit = normalize_limit(limit)
    if limit is None:
        return {"used": used, "max": None, "percentage": 0, "hasReached": False}
    if limit == 0:
        return {"used": used, "max": 0, "percentage": 100, "hasReached": True}

    percentage = round(min(used / limit * 100, 100), 2)
    return {
        "used": used,
        "max": limit,
        "percentage": percentage,
        "hasReached": used >= limit,
    }


def plan_summary(plan: dict) -> Dict[str, Any]:
    return {
        "id": str(plan["_id"]) if plan.get("_id") is not None else plan.get("slug"),
        "slug": plan.get("slug"),
        "name": plan.get("name"),
        "price": plan.get("price"),
        "limits": {key: normalize_limit(value) for key, value in (plan.get("limits") or {}).items()},
        "features": plan.get("features") or {},
    }


class ResourceLimitService:
    """
    Used-vs-ceiling accounting for the plan-tracked resources.

    Plan resolution never fails (free plan fallback); a failing count query
    propagates so the caller can answer with a 500 instead of partial data.
    """

    def __init__(self, db, catalog=None):
        self.db = db
        self.catalog = catalog or PlanCatalog(db)
        self.resolver = PlanResolver(db, self.catalog)

    def _owner_filter(self, owner_oid, rule) -> dict:
        query = {"owner_id": owner_oid}
        if rule.get("active_only"):
            query["active"] = True
        return query

    def count_usage(self, user_id, resource: str) -> int:
        rule = RESOURCE_RULES[resource]
        owner_oid = to_object_id(user_id)
        if owner_oid is None:
            raise ValueError(f"Invalid user id: {user_id}")

        query = self._owner_filter(owner_oid, rule)
        sum_field = rule.get("sum_field")
        total = 0

        for name in rule["collections"]:
            collection = self.db.get_collection(name)
            if sum_field:
                rows = list(collection.aggregate([
                    {"$match": query},
                    {"$group": {"_id": None, "total": {"$sum": f"${sum_field}"}}},
                ]))
                total += int(rows[0]["total"] or 0) if rows else 0
            else:
                total += collection.count_documents(query)

        return total

    def check_resource_limit(self, user_id, resource: str, plan: Optional[dict] = None) -> Dict[str, Any]:
        if resource not in RESOURCE_RULES:
            raise KeyError(f"Unknown resource: {resource}")
        plan = plan or self.resolver.get_user_plan(user_id)
        limit = (plan.get("limits") or {}).get(RESOURCE_RULES[resource]["limit_key"])
        return build_usage(self.count_usage(user_id, resource), limit)

    def get_user_resource_limits(self, user_id) -> Dict[str, Any]:
        plan = self.resolver.get_user_plan(user_id)

        usage = {}
        for resource in TRACKED_RESOURCES:
            usage[resource] = self.check_resource_limit(user_id, resource, plan=plan)

        Log.info(
            f"[resource_limits.py][get_user_resource_limits][{user_id}] "
            f"plan={plan.get('slug')} "
            + " ".join(f"{k}={v['used']}/{v['max']}" for k, v in usage.items())
        )
        return {"plan": plan_summary(plan), "usage": usage}


def get_user_resource_limits(db, user_id) -> Dict[str, Any]:
    return ResourceLimitService(db).get_user_resource_limits(user_id)
