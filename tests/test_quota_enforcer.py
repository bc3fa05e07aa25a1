"""Tests for the atomic per-owner counters."""

import pytest
from bson import ObjectId

from fletoads.models import Product
from fletoads.utils.plan import PlanLimitError, QuotaEnforcer


def _counter(db, owner_id, resource):
    return db.get_collection("resource_counters").find_one(
        {"owner_id": ObjectId(owner_id), "resource": resource}
    )


def test_reserve_seeds_counter_from_existing_documents(ctx, db, make_user):
    user_id, _ = make_user(plan_slug="start")
    Product(owner_id=user_id, name="Arroz", price=10).save()
    Product(owner_id=user_id, name="Feijão", price=8).save()

    QuotaEnforcer(db, user_id, enforce=True).reserve("products")

    assert _counter(db, user_id, "products")["count"] == 3


def test_enforced_reserve_stops_at_the_limit(ctx, db, make_user):
    # start plan: one integration
    user_id, _ = make_user(plan_slug="start")
    enforcer = QuotaEnforcer(db, user_id, enforce=True)

    enforcer.reserve("integrations")
    with pytest.raises(PlanLimitError) as exc:
        enforcer.reserve("integrations")

    assert exc.value.code == "PACKAGE_LIMIT_REACHED"
    assert exc.value.meta["limit"] == 1
    assert exc.value.meta["current"] == 1

    enforcer.release("integrations")
    enforcer.reserve("integrations")


def test_zero_limit_rejects_first_reservation(ctx, db, make_user):
    user_id, _ = make_user()

    with pytest.raises(PlanLimitError):
        QuotaEnforcer(db, user_id, enforce=True).reserve("flyers")


def test_advisory_mode_never_rejects(ctx, db, make_user):
    user_id, _ = make_user()
    enforcer = QuotaEnforcer(db, user_id, enforce=False)

    for _ in range(3):
        enforcer.reserve("flyers")

    assert _counter(db, user_id, "flyers")["count"] == 3


def test_release_never_goes_below_zero(ctx, db, make_user):
    user_id, _ = make_user(plan_slug="start")
    enforcer = QuotaEnforcer(db, user_id, enforce=True)

    enforcer.reserve("flyers")
    enforcer.release("flyers")
    enforcer.release("flyers")

    assert _counter(db, user_id, "flyers")["count"] == 0


def test_storage_cannot_be_reserved(ctx, db, make_user):
    user_id, _ = make_user()
    with pytest.raises(KeyError):
        QuotaEnforcer(db, user_id).reserve("storage")
