from marshmallow import Schema, fields, validate, validates_schema, ValidationError, EXCLUDE

from ..models.coupon_model import COUPON_TYPES
from ..utils.mongo_helpers import to_naive_utc
from ..utils.validation import validate_objectid


class CouponSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    # generated when omitted
    code = fields.Str(
        required=False,
        validate=[validate.Length(min=3, max=30), validate.Regexp(r"^[A-Za-z0-9_-]+$")],
    )
    type = fields.Str(
        required=True,
        validate=validate.OneOf(COUPON_TYPES),
        error_messages={"required": "Coupon type is required"},
    )
    value = fields.Float(load_default=0.0, validate=validate.Range(min=0))
    description = fields.Str(required=False, allow_none=True, validate=validate.Length(max=500))
    min_order_value = fields.Float(required=False, allow_none=True, validate=validate.Range(min=0))
    start_date = fields.DateTime(required=False, allow_none=True)
    expires_at = fields.DateTime(required=False, allow_none=True)
    max_uses = fields.Int(required=False, allow_none=True, validate=validate.Range(min=1))
    product_ids = fields.List(fields.Str(validate=validate_objectid), load_default=list)
    active = fields.Bool(load_default=True)

    @validates_schema
    def validate_coupon(self, data, **kwargs):
        start, end = to_naive_utc(data.get("start_date")), to_naive_utc(data.get("expires_at"))
        if start and end and end < start:
            raise ValidationError("expires_at must not be before start_date", field_name="expires_at")
        if data.get("type") == "percentual" and (data.get("value") or 0) > 100:
            raise ValidationError("Percentage coupons cannot exceed 100", field_name="value")


class CouponUpdateSchema(CouponSchema):
    code = fields.Str(required=False, validate=[validate.Length(min=3, max=30), validate.Regexp(r"^[A-Za-z0-9_-]+$")])
    type = fields.Str(required=False, validate=validate.OneOf(COUPON_TYPES))
    value = fields.Float(required=False, validate=validate.Range(min=0))
    product_ids = fields.List(fields.Str(validate=validate_objectid), required=False)
    active = fields.Bool(required=False)


class CouponValidateSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    code = fields.Str(required=True, error_messages={"required": "Coupon code is required"})
    order_total = fields.Float(load_default=0.0, validate=validate.Range(min=0))
    product_ids = fields.List(fields.Str(), load_default=list)
