from bson import ObjectId
from marshmallow import ValidationError


def validate_objectid(value):
    if not ObjectId.is_valid(value):
        raise ValidationError(f"{value} is not a valid ID. Ensure you add a valid Item ID.")


def validate_password(value):
    if not value or len(value) < 6:
        raise ValidationError("Password must be at least 6 characters long.")
    if value.strip() != value:
        raise ValidationError("Password must not start or end with spaces.")
