"""Tests for coupon management and checkout validation."""

from datetime import datetime, timedelta

import pytest
from bson import ObjectId

from fletoads.models import Coupon
from fletoads.services.coupon_service import CouponService, CouponValidationError


def _create(client, headers, **overrides):
    payload = {"code": "promo10", "type": "percentual", "value": 10}
    payload.update(overrides)
    return client.post("/api/cupons", json=payload, headers=headers)


def test_create_uppercases_code_and_rejects_duplicates(client, user):
    _, headers = user

    response = _create(client, headers)
    assert response.status_code == 201
    assert response.get_json()["data"]["code"] == "PROMO10"

    assert _create(client, headers, code="PROMO10").status_code == 409


def test_same_code_is_allowed_for_different_owners(client, make_user):
    _, first = make_user()
    _, second = make_user()
    assert _create(client, first).status_code == 201
    assert _create(client, second).status_code == 201


def test_code_is_generated_when_omitted(client, user):
    _, headers = user
    response = client.post("/api/cupons", json={"type": "valor_fixo", "value": 5}, headers=headers)
    assert response.status_code == 201
    code = response.get_json()["data"]["code"]
    assert len(code) == 8
    assert set(code) <= set(CouponService.CODE_CHARS)


def test_percentage_over_100_is_rejected(client, user):
    _, headers = user
    assert _create(client, headers, value=150).status_code == 400


def test_validate_applies_discount(client, user):
    _, headers = user
    _create(client, headers, min_order_value=50)

    response = client.post("/api/cupons/validar", json={"code": "promo10", "order_total": 80}, headers=headers)

    assert response.status_code == 200
    data = response.get_json()["data"]
    assert data["valid"] is True
    assert data["discount"] == 8.0
    assert data["coupon"]["code"] == "PROMO10"


def test_validate_rejections(client, user):
    _, headers = user
    _create(client, headers, min_order_value=50)

    def validate(**payload):
        return client.post("/api/cupons/validar", json=payload, headers=headers).status_code

    assert validate(code="NOPE", order_total=100) == 404
    assert validate(code="PROMO10", order_total=10) == 400


def test_validate_window_usage_and_products(ctx, make_user):
    user_id, _ = make_user()
    product_id = ObjectId()
    now = datetime(2024, 6, 1, 12, 0)
    Coupon(
        owner_id=user_id, code="junho", type="valor_fixo", value=15,
        start_date=now - timedelta(days=1), expires_at=now + timedelta(days=1),
        max_uses=2, uses=0, product_ids=[product_id],
    ).save()

    result = CouponService.validate(user_id, "JUNHO", order_total=10, product_ids=[str(product_id)], now=now)
    # fixed discount never exceeds the order
    assert result["discount"] == 10.0

    with pytest.raises(CouponValidationError, match="validity period"):
        CouponService.validate(user_id, "JUNHO", product_ids=[str(product_id)], now=now + timedelta(days=3))

    with pytest.raises(CouponValidationError, match="selected products"):
        CouponService.validate(user_id, "JUNHO", product_ids=[str(ObjectId())], now=now)

    Coupon.collection().update_one({"code": "JUNHO"}, {"$set": {"uses": 2}})
    with pytest.raises(CouponValidationError) as exc:
        CouponService.validate(user_id, "JUNHO", product_ids=[str(product_id)], now=now)
    assert exc.value.status_code == "BAD_REQUEST"
    assert exc.value.message == "Coupon usage limit reached"


def test_update_and_delete(client, user):
    _, headers = user
    coupon_id = _create(client, headers).get_json()["data"]["_id"]
    _create(client, headers, code="OUTRO")

    assert client.put(f"/api/cupons/{coupon_id}", json={"code": "outro"}, headers=headers).status_code == 409
    response = client.put(f"/api/cupons/{coupon_id}", json={"active": False}, headers=headers)
    assert response.get_json()["data"]["active"] is False
    # inactive coupons cannot be redeemed
    validate = client.post("/api/cupons/validar", json={"code": "PROMO10"}, headers=headers)
    assert validate.status_code == 404

    assert client.delete(f"/api/cupons/{coupon_id}", headers=headers).status_code == 200
    assert client.get(f"/api/cupons/{coupon_id}", headers=headers).status_code == 404


def test_window_accepts_mixed_timezone_notation(client, user):
    _, headers = user

    response = _create(client, headers, start_date="2026-01-01T00:00:00", expires_at="2026-02-01T00:00:00+00:00")
    assert response.status_code == 201

    response = _create(
        client, headers, code="ATRASADO",
        start_date="2026-02-01T00:00:00Z", expires_at="2026-01-01T00:00:00",
    )
    assert response.status_code == 400
