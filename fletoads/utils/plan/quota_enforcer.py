# fletoads/utils/plan/quota_enforcer.py
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from ...constants.service_code import COLLECTIONS
from ..mongo_helpers import to_object_id
from .limits_map import COUNTABLE_RESOURCES, RESOURCE_RULES
from .resource_limits import ResourceLimitService, normalize_limit


class PlanLimitError(Exception):
    def __init__(self, code: str, message: str, meta=None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.meta = meta or {}


class QuotaEnforcer:
    """
    Running per-owner counters with atomic reserve/release.

    One document per (owner_id, resource) in `resource_counters`. The counter
    is seeded from the live document count when first created, then moved
    only with $inc. A finite limit is enforced by a conditional increment
    (count <= limit - qty) so two concurrent creates cannot both pass.

    With enforce=False every limit is treated as unlimited: counters keep
    moving but nothing is rejected.
    """

    def __init__(self, db, owner_id, plan: Optional[dict] = None, enforce: bool = False):
        self.db = db
        self.owner_id = str(owner_id)
        self.owner_oid = to_object_id(owner_id)
        self.enforce = enforce
        self.limits_service = ResourceLimitService(db)
        self.plan = plan or self.limits_service.resolver.get_user_plan(self.owner_id)

    def _counters(self):
        return self.db.get_collection(COLLECTIONS["RESOURCE_COUNTERS"])

    def get_limit(self, resource: str):
        limit_key = RESOURCE_RULES[resource]["limit_key"]
        return normalize_limit((self.plan.get("limits") or {}).get(limit_key))

    def _ensure_counter(self, resource: str, now):
        selector = {"owner_id": self.owner_oid, "resource": resource}
        if self._counters().find_one(selector, {"_id": 1}):
            return selector
        current = self.limits_service.count_usage(self.owner_id, resource)
        try:
            self._counters().update_one(
                selector,
                {
                    "$setOnInsert": {
                        "owner_id": self.owner_oid,
                        "resource": resource,
                        "count": current,
                        "created_at": now,
                    },
                },
                upsert=True,
            )
        except DuplicateKeyError:
            pass
        return selector

    def reserve(self, resource: str, qty: int = 1) -> Dict[str, Any]:
        if resource not in COUNTABLE_RESOURCES:
            raise KeyError(f"Resource cannot be reserved: {resource}")

        qty = int(qty)
        if qty <= 0:
            return {"reserved": 0}

        now = datetime.utcnow()
        limit = self.get_limit(resource) if self.enforce else None
        selector = self._ensure_counter(resource, now)

        if limit is None:
            doc = self._counters().find_one_and_update(
                selector,
                {"$inc": {"count": qty}, "$set": {"updated_at": now}},
                return_document=ReturnDocument.AFTER,
            )
            return {"reserved": qty, "limit": None, "count": doc.get("count") if doc else None}

        meta = {
            "resource": resource,
            "limit": limit,
            "attempted": qty,
            "plan": self.plan.get("slug"),
        }

        if qty > limit:
            raise PlanLimitError(
                "PACKAGE_LIMIT_REACHED",
                f"Plan limit reached for {resource}. Upgrade your plan to continue.",
                meta={**meta, "current": None},
            )

        # Conditional increment WITHOUT upsert
        doc = self._counters().find_one_and_update(
            {**selector, "count": {"$lte": limit - qty}},
            {"$inc": {"count": qty}, "$set": {"updated_at": now}},
            upsert=False,
            return_document=ReturnDocument.AFTER,
        )

        if not doc:
            existing = self._counters().find_one(selector, {"count": 1}) or {}
            raise PlanLimitError(
                "PACKAGE_LIMIT_REACHED",
                f"Plan limit reached for {resource}. Upgrade your plan to continue.",
                meta={**meta, "current": int(existing.get("count") or 0)},
            )

        return {"reserved": qty, "limit": limit, "count": doc.get("count")}

    def release(self, resource: str, qty: int = 1) -> None:
        """Give back units after a failed create or a delete; never below zero."""
        qty = int(qty)
        if qty <= 0 or resource not in COUNTABLE_RESOURCES:
            return

        now = datetime.utcnow()
        self._counters().update_one(
            {"owner_id": self.owner_oid, "resource": resource, "count": {"$gte": qty}},
            {"$inc": {"count": -qty}, "$set": {"updated_at": now}},
        )
