import re
import unicodedata
from datetime import date, datetime, timezone

from bson import ObjectId


def normalize_name(text) -> str:
    """
    Build the URL-ish form used for `normalized_name`:
    accents stripped, lowercased, whitespace runs collapsed into "-".
    """
    if text is None:
        return ""
    text = unicodedata.normalize("NFKD", str(text))
    text = "".join(ch for ch in text if not unicodedata.combining(ch))
    return re.sub(r"\s+", "-", text.strip().lower())


def to_object_id(value):
    """Return an ObjectId for `value`, or None when it is not a valid id."""
    if isinstance(value, ObjectId):
        return value
    if value is not None and ObjectId.is_valid(str(value)):
        return ObjectId(str(value))
    return None


def to_naive_utc(value):
    """Aware datetimes become naive UTC, matching what pymongo hands back."""
    if isinstance(value, datetime) and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def create_id_filter(value, fields=("slug", "normalized_name")) -> dict:
    """
    Build a query filter for a path parameter that may be an ObjectId.

    A valid ObjectId matches by `_id` only. Anything else matches the raw
    string `_id` or one of the alternate lookup fields; `normalized_name`
    is compared against normalize_name(value).
    """
    oid = to_object_id(value)
    if oid is not None:
        return {"_id": oid}

    raw = "" if value is None else str(value)
    clauses = [{"_id": raw}]
    for field in fields:
        if field == "normalized_name":
            clauses.append({field: normalize_name(raw)})
        else:
            clauses.append({field: raw})
    return {"$or": clauses}


def serialize_mongo_object(obj):
    """
    Recursively convert BSON-native values to JSON-friendly ones:
    ObjectId -> str, datetime/date -> ISO-8601 string.
    Plain values pass through, so applying it twice changes nothing.
    """
    if isinstance(obj, ObjectId):
        return str(obj)
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()
    if isinstance(obj, dict):
        return {key: serialize_mongo_object(value) for key, value in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [serialize_mongo_object(item) for item in obj]
    return obj
