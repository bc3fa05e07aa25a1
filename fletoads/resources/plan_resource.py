# resources/plan_resource.py
from flask import g
from flask.views import MethodView

from ..extensions.db import get_db
from ..models.notification_model import Notification
from ..models.plan_model import Plan
from ..models.user_model import User
from ..schemas.plan_schema import AssignPlanSchema, SubscribePlanSchema
from ..security.auth import admin_required, token_required
from ..utils.blueprint import Blueprint
from ..utils.helpers import request_log_tag
from ..utils.json_response import prepared_response
from ..utils.logger import Log
from ..utils.plan.plan_catalog import PlanCatalog

blp_plan = Blueprint("plans", __name__, description="Subscription plans")


def _apply_plan(user_id, plan, log_tag, message):
    start_date, end_date = Plan.compute_period(plan.get("interval"))
    plan_ref = User.assign_plan(user_id, plan, start_date, end_date)
    if plan_ref is None:
        return None

    Notification.notify(user_id, "Plano atualizado", message, type=Notification.TYPE_SUCCESS)
    Log.info(f"{log_tag} user {user_id} now on plan {plan.get('slug')} until {end_date}")
    return plan_ref


@blp_plan.route("/planos", methods=["GET"])
class ListPlans(MethodView):
    """List all active plans (public endpoint)."""

    def get(self):
        try:
            plans = PlanCatalog(get_db()).list_plans()
            return prepared_response(True, "OK", "Plans retrieved successfully", data=plans)
        except Exception as e:
            Log.error(f"[ListPlans] Error: {str(e)}")
            return prepared_response(False, "INTERNAL_SERVER_ERROR", "Failed to retrieve plans")


@blp_plan.route("/planos/<string:slug>", methods=["GET"])
class GetPlan(MethodView):
    def get(self, slug):
        """Get a plan by slug, id or name."""
        try:
            plan = PlanCatalog(get_db()).get_plan_by_slug(slug)
        except Exception as e:
            Log.error(f"[GetPlan][{slug}] Error: {str(e)}")
            return prepared_response(False, "INTERNAL_SERVER_ERROR", "Failed to retrieve plan")

        if not plan:
            return prepared_response(False, "NOT_FOUND", "Plan not found")
        return prepared_response(True, "OK", "Plan retrieved successfully", data=plan)


@blp_plan.route("/planos/seed", methods=["POST"])
class SeedPlans(MethodView):
    @admin_required
    def post(self):
        """Load the default plan table into the database (idempotent)."""
        log_tag = request_log_tag("plan_resource.py", "SeedPlans", "post")
        try:
            result = PlanCatalog(get_db()).seed_plans()
        except Exception as e:
            Log.error(f"{log_tag} Error seeding plans: {e}")
            return prepared_response(False, "INTERNAL_SERVER_ERROR", "Failed to seed plans")
        return prepared_response(True, "OK", "Plans seeded successfully", data=result)


@blp_plan.route("/planos/assinar", methods=["POST"])
class SubscribePlan(MethodView):
    @token_required
    @blp_plan.arguments(SubscribePlanSchema, location="json")
    def post(self, json_data):
        """Move the caller to another plan."""
        log_tag = request_log_tag("plan_resource.py", "SubscribePlan", "post", plan=json_data["plan_slug"])
        user_id = g.current_user["_id"]

        plan = PlanCatalog(get_db()).get_plan_by_slug(json_data["plan_slug"])
        if not plan:
            return prepared_response(False, "NOT_FOUND", "Plan not found")

        try:
            plan_ref = _apply_plan(user_id, plan, log_tag, f"Sua assinatura do plano {plan.get('name')} está ativa.")
        except Exception as e:
            Log.error(f"{log_tag} Error subscribing: {e}")
            return prepared_response(False, "INTERNAL_SERVER_ERROR", "Failed to subscribe to plan")

        if plan_ref is None:
            return prepared_response(False, "NOT_FOUND", "User not found")
        return prepared_response(True, "OK", "Plan subscribed successfully", data=plan_ref)


@blp_plan.route("/admin/usuarios/atribuir-plano", methods=["POST"])
class AssignPlan(MethodView):
    @admin_required
    @blp_plan.arguments(AssignPlanSchema, location="json")
    def post(self, json_data):
        """Assign a plan to any user (admin only)."""
        log_tag = request_log_tag(
            "plan_resource.py", "AssignPlan", "post",
            target_user=json_data["user_id"], plan=json_data["plan_slug"],
        )

        if not User.get_by_id(json_data["user_id"]):
            return prepared_response(False, "NOT_FOUND", "User not found")

        plan = PlanCatalog(get_db()).get_plan_by_slug(json_data["plan_slug"])
        if not plan:
            return prepared_response(False, "NOT_FOUND", "Plan not found")

        try:
            plan_ref = _apply_plan(
                json_data["user_id"], plan, log_tag,
                f"O plano {plan.get('name')} foi atribuído à sua conta pelo administrador.",
            )
        except Exception as e:
            Log.error(f"{log_tag} Error assigning plan: {e}")
            return prepared_response(False, "INTERNAL_SERVER_ERROR", "Failed to assign plan")

        if plan_ref is None:
            return prepared_response(False, "NOT_FOUND", "User not found")
        return prepared_response(
            True,
            "OK",
            "Plan assigned successfully",
            data={"user_id": json_data["user_id"], "plan": plan_ref},
        )


@blp_plan.route("/admin/planos/stats", methods=["GET"])
class PlanStats(MethodView):
    @admin_required
    def get(self):
        """Subscriber count per plan."""
        log_tag = request_log_tag("plan_resource.py", "PlanStats", "get")
        try:
            plans = PlanCatalog(get_db()).list_plans()
            stats = Plan.subscriber_stats(plans)
        except Exception as e:
            Log.error(f"{log_tag} Error computing plan stats: {e}")
            return prepared_response(False, "INTERNAL_SERVER_ERROR", "Failed to compute plan stats")
        return prepared_response(True, "OK", "Plan stats retrieved successfully", data=stats)
