from marshmallow import Schema, fields, validate, EXCLUDE

from ..utils.validation import validate_password


class RegisterSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    name = fields.Str(
        required=True,
        validate=validate.Length(min=2, max=120),
        error_messages={"required": "Name is required"},
    )
    email = fields.Email(required=True, error_messages={"required": "Email is required"})
    password = fields.Str(
        required=True,
        load_only=True,
        validate=validate_password,
        error_messages={"required": "Password is required"},
    )
    phone = fields.Str(required=False, allow_none=True, validate=validate.Length(max=30))


class LoginSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    email = fields.Email(required=True, error_messages={"required": "Email is required"})
    password = fields.Str(required=True, load_only=True, error_messages={"required": "Password is required"})
