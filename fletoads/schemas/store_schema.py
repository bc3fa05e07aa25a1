from marshmallow import Schema, fields, validate, EXCLUDE


class AddressSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    street = fields.Str(allow_none=True)
    number = fields.Str(allow_none=True)
    complement = fields.Str(allow_none=True)
    district = fields.Str(allow_none=True)
    city = fields.Str(allow_none=True)
    state = fields.Str(allow_none=True)
    zip_code = fields.Str(allow_none=True)
    country = fields.Str(allow_none=True)


class StoreSchema(Schema):
    """Caller's own store; all fields optional, name needed on creation."""
    class Meta:
        unknown = EXCLUDE

    name = fields.Str(validate=validate.Length(min=2, max=120))
    slug = fields.Str(validate=[validate.Length(min=3, max=80), validate.Regexp(r"^[a-z0-9-]+$")])
    description = fields.Str(allow_none=True, validate=validate.Length(max=2000))
    phone = fields.Str(allow_none=True, validate=validate.Length(max=30))
    email = fields.Email(allow_none=True)
    website = fields.Url(allow_none=True)
    logo = fields.Url(allow_none=True)
    banner = fields.Url(allow_none=True)
    address = fields.Nested(AddressSchema, allow_none=True)
    active = fields.Bool()
