# fletoads/utils/plan/plan_resolver.py
import copy
from datetime import datetime

from ...constants.service_code import COLLECTIONS
from ..logger import Log
from ..mongo_helpers import to_object_id
from .plan_catalog import DEFAULT_PLANS, PlanCatalog


class PlanResolver:
    """
    Resolves the plan that currently applies to a user.

    The user document carries a `plan` reference {id, slug, name, active,
    start_date, end_date}. Anything that prevents resolving it (no user, no
    reference, inactive or expired reference, unknown slug, database error)
    resolves to the free plan instead of raising.
    """

    def __init__(self, db, catalog=None):
        self.db = db
        self.catalog = catalog or PlanCatalog(db)

    def _free_plan(self):
        try:
            return self.catalog.get_free_plan()
        except Exception as e:
            Log.warning(f"[PlanResolver][_free_plan] catalog unavailable, using static free plan: {e}")
            return copy.deepcopy(DEFAULT_PLANS[0])

    @staticmethod
    def plan_reference_is_current(ref, now=None) -> bool:
        if not isinstance(ref, dict):
            return False
        if ref.get("active") is False:
            return False
        end_date = ref.get("end_date")
        if isinstance(end_date, datetime) and end_date < (now or datetime.utcnow()):
            return False
        return True

    def get_user_plan(self, user_id) -> dict:
        log_tag = f"[plan_resolver.py][PlanResolver][get_user_plan][{user_id}]"

        try:
            oid = to_object_id(user_id)
            if oid is None:
                Log.info(f"{log_tag} invalid user id, using free plan")
                return self._free_plan()

            user = self.db.get_collection(COLLECTIONS["USERS"]).find_one(
                {"_id": oid}, {"plan": 1}
            )
            if not user:
                Log.info(f"{log_tag} user not found, using free plan")
                return self._free_plan()

            ref = user.get("plan")
            if not self.plan_reference_is_current(ref):
                return self._free_plan()

            plan = self.catalog.get_plan_by_slug(ref.get("slug")) or self.catalog.get_plan_by_slug(ref.get("id"))
            if not plan:
                Log.warning(f"{log_tag} plan reference {ref.get('slug')!r} not in catalog, using free plan")
                return self._free_plan()

            return plan

        except Exception as e:
            Log.error(f"{log_tag} plan lookup failed, using free plan: {e}")
            return self._free_plan()
