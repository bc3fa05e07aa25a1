from marshmallow import Schema, fields, validate, validates_schema, ValidationError, EXCLUDE


class ProductSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    name = fields.Str(
        required=True,
        validate=validate.Length(min=2, max=150),
        error_messages={"required": "Product name is required"},
    )
    description = fields.Str(required=False, allow_none=True, validate=validate.Length(max=2000))
    price = fields.Float(
        required=True,
        validate=validate.Range(min=0),
        error_messages={"required": "Product price is required"},
    )
    promotional_price = fields.Float(required=False, allow_none=True, validate=validate.Range(min=0))
    stock = fields.Int(required=False, allow_none=True, validate=validate.Range(min=0))
    category = fields.Str(required=False, allow_none=True, validate=validate.Length(max=80))
    image_url = fields.Url(required=False, allow_none=True)
    size_bytes = fields.Int(load_default=0, validate=validate.Range(min=0))
    active = fields.Bool(load_default=True)

    @validates_schema
    def validate_promotion(self, data, **kwargs):
        price, promo = data.get("price"), data.get("promotional_price")
        if price is not None and promo is not None and promo > price:
            raise ValidationError("promotional_price must not exceed price", field_name="promotional_price")


class ProductUpdateSchema(ProductSchema):
    name = fields.Str(required=False, validate=validate.Length(min=2, max=150))
    price = fields.Float(required=False, validate=validate.Range(min=0))
    size_bytes = fields.Int(required=False, validate=validate.Range(min=0))
    active = fields.Bool(required=False)
