# fletoads/utils/plan/limits_map.py
from ...constants.service_code import COLLECTIONS

# Resources tracked against plan ceilings.
#   limit_key   -> key inside plan["limits"]
#   collections -> where the owner's documents live
#   active_only -> count only documents with active == True
#   sum_field   -> aggregate this field instead of counting documents
RESOURCE_RULES = {
    "flyers": {
        "limit_key": "flyers",
        "collections": [COLLECTIONS["FLYERS"]],
        "active_only": False,
    },
    "products": {
        "limit_key": "products",
        "collections": [COLLECTIONS["PRODUCTS"]],
        "active_only": True,
    },
    "storage": {
        "limit_key": "storage",
        "collections": [COLLECTIONS["FLYERS"], COLLECTIONS["PRODUCTS"]],
        "sum_field": "size_bytes",
    },
    "integrations": {
        "limit_key": "integrations",
        "collections": [COLLECTIONS["INTEGRATIONS"]],
        "active_only": True,
    },
}

TRACKED_RESOURCES = ("flyers", "products", "storage", "integrations")

# Resources that can be reserved one document at a time
COUNTABLE_RESOURCES = tuple(
    name for name, rule in RESOURCE_RULES.items() if not rule.get("sum_field")
)
