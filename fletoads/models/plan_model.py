from datetime import datetime, timedelta

from ..constants.service_code import COLLECTIONS
from .base_model import BaseModel
from .user_model import User

INTERVALS = ["mensal", "trimestral", "semestral", "anual"]

_INTERVAL_MONTHS = {
    "mensal": 1,
    "trimestral": 3,
    "semestral": 6,
    "anual": 12,
}


def _add_months(start: datetime, months: int) -> datetime:
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    # clamp to the last day of the target month
    for day in (start.day, 30, 29, 28):
        try:
            return start.replace(year=year, month=month, day=day)
        except ValueError:
            continue
    raise ValueError(f"Cannot add {months} months to {start}")


class Plan(BaseModel):
    """
    Subscription tier ("plano"). Reference data managed by administrators;
    the catalog in utils.plan serves reads.
    """

    collection_name = COLLECTIONS["PLANS"]

    @staticmethod
    def compute_period(interval, start=None):
        """(start_date, end_date) for a subscription starting at `start`."""
        start = start or datetime.utcnow()
        months = _INTERVAL_MONTHS.get((interval or "").strip().lower())
        if months is None:
            return start, start + timedelta(days=30)
        return start, _add_months(start, months)

    @classmethod
    def subscriber_stats(cls, plans):
        """
        Per-plan subscriber counts for every plan in `plans` (zero included).
        """
        counts, without_plan, total_users = User.plan_subscriber_counts()

        rows = []
        for plan in plans:
            slug = plan.get("slug")
            rows.append({
                "slug": slug,
                "name": plan.get("name"),
                "price": plan.get("price"),
                "subscribers": counts.pop(slug, 0),
            })

        # references to plans that are no longer in the catalog
        for slug, subscribers in counts.items():
            rows.append({"slug": slug, "name": None, "price": None, "subscribers": subscribers})

        return {
            "plans": rows,
            "without_plan": without_plan,
            "total_users": total_users,
        }

    @classmethod
    def create_indexes(cls):
        cls.collection().create_index("slug", unique=True)
