from marshmallow import Schema, fields, validate, EXCLUDE

from ..models.integration_model import INTEGRATION_TYPES


class IntegrationSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    type = fields.Str(
        required=True,
        validate=validate.OneOf(INTEGRATION_TYPES),
        error_messages={"required": "Integration type is required"},
    )
    name = fields.Str(required=False, allow_none=True, validate=validate.Length(max=100))
    config = fields.Dict(load_default=dict)
    active = fields.Bool(load_default=True)


class IntegrationUpdateSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    name = fields.Str(required=False, validate=validate.Length(max=100))
    config = fields.Dict(required=False)
    active = fields.Bool(required=False)
