from marshmallow import Schema, fields, validate, EXCLUDE

from ..utils.validation import validate_objectid


class SubscribePlanSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    plan_slug = fields.Str(
        required=True,
        validate=validate.Length(min=1, max=60),
        error_messages={"required": "Plan slug is required"},
    )


class AssignPlanSchema(Schema):
    """Admin assigns a plan to any user."""
    class Meta:
        unknown = EXCLUDE

    user_id = fields.Str(
        required=True,
        validate=validate_objectid,
        error_messages={"required": "User ID is required", "invalid": "Invalid User ID"},
    )
    plan_slug = fields.Str(
        required=True,
        validate=validate.Length(min=1, max=60),
        error_messages={"required": "Plan slug is required"},
    )
