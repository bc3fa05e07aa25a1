from .plan_catalog import DEFAULT_PLANS, FREE_PLAN_SLUG, PlanCatalog, has_feature
from .plan_resolver import PlanResolver
from .resource_limits import ResourceLimitService, build_usage, get_user_resource_limits
from .quota_enforcer import PlanLimitError, QuotaEnforcer

__all__ = [
    "DEFAULT_PLANS",
    "FREE_PLAN_SLUG",
    "PlanCatalog",
    "PlanResolver",
    "PlanLimitError",
    "QuotaEnforcer",
    "ResourceLimitService",
    "build_usage",
    "get_user_resource_limits",
    "has_feature",
]
