from marshmallow import Schema, fields, validate, validates_schema, ValidationError, EXCLUDE

from ..utils.mongo_helpers import to_naive_utc
from ..utils.validation import validate_objectid


class FlyerSchema(Schema):
    """Schema for creating a flyer ("panfleto")."""
    class Meta:
        unknown = EXCLUDE

    title = fields.Str(
        required=True,
        validate=validate.Length(min=2, max=150),
        error_messages={"required": "Flyer title is required"},
    )
    description = fields.Str(required=False, allow_none=True, validate=validate.Length(max=2000))
    image_url = fields.Url(required=False, allow_none=True)
    size_bytes = fields.Int(load_default=0, validate=validate.Range(min=0))
    start_date = fields.DateTime(required=False, allow_none=True)
    end_date = fields.DateTime(required=False, allow_none=True)
    product_ids = fields.List(fields.Str(validate=validate_objectid), load_default=list)
    active = fields.Bool(load_default=True)

    @validates_schema
    def validate_window(self, data, **kwargs):
        start, end = to_naive_utc(data.get("start_date")), to_naive_utc(data.get("end_date"))
        if start and end and end < start:
            raise ValidationError("end_date must not be before start_date", field_name="end_date")


class FlyerUpdateSchema(FlyerSchema):
    """Partial update; every field optional."""
    title = fields.Str(required=False, validate=validate.Length(min=2, max=150))
    size_bytes = fields.Int(required=False, validate=validate.Range(min=0))
    product_ids = fields.List(fields.Str(validate=validate_objectid), required=False)
    active = fields.Bool(required=False)
