# fletoads/utils/plan/plan_catalog.py
from __future__ import annotations

import copy
from datetime import datetime
from typing import Optional

from ...constants.service_code import COLLECTIONS
from ..logger import Log
from ..mongo_helpers import normalize_name

MB = 1024 * 1024
GB = 1024 * MB

FREE_PLAN_SLUG = "gratis"

# -1 / None on a limit means unlimited
DEFAULT_PLANS = [
    {
        "slug": "gratis",
        "name": "Grátis",
        "price": 0.0,
        "interval": "mensal",
        "popular": False,
        "active": True,
        "description": "Ideal para quem está começando e quer experimentar a plataforma.",
        "limits": {"flyers": 0, "products": 10, "storage": 100 * MB, "integrations": 0},
        "features": {
            "vitrine": True,
            "panfletos": False,
            "produtos": True,
            "cupons": False,
            "integracoes": False,
            "crm": False,
            "assistente_ia": False,
            "tour_virtual": False,
            "layouts_vitrine": 2,
            "widgets": 3,
            "imagens_por_produto": 1,
        },
    },
    {
        "slug": "start",
        "name": "Start",
        "price": 297.0,
        "interval": "mensal",
        "popular": False,
        "active": True,
        "description": "Perfeito para pequenos negócios que querem começar a crescer online.",
        "limits": {"flyers": 20, "products": 30, "storage": 500 * MB, "integrations": 1},
        "features": {
            "vitrine": True,
            "panfletos": True,
            "produtos": True,
            "cupons": True,
            "integracoes": True,
            "crm": True,
            "assistente_ia": "Básico",
            "tour_virtual": False,
            "layouts_vitrine": 4,
            "widgets": 5,
            "imagens_por_produto": 2,
        },
    },
    {
        "slug": "basico",
        "name": "Básico",
        "price": 799.0,
        "interval": "mensal",
        "popular": True,
        "active": True,
        "description": "Para lojas que já vendem e querem mais alcance.",
        "limits": {"flyers": 30, "products": 50, "storage": 1 * GB, "integrations": 1},
        "features": {
            "vitrine": True,
            "panfletos": True,
            "produtos": True,
            "cupons": True,
            "integracoes": True,
            "crm": True,
            "assistente_ia": "Básico",
            "tour_virtual": False,
            "layouts_vitrine": 4,
            "widgets": 5,
            "imagens_por_produto": 3,
        },
    },
    {
        "slug": "completo",
        "name": "Completo",
        "price": 1599.0,
        "interval": "mensal",
        "popular": False,
        "active": True,
        "description": "Todos os recursos de divulgação para lojas em crescimento.",
        "limits": {"flyers": 50, "products": 60, "storage": 2 * GB, "integrations": 1},
        "features": {
            "vitrine": True,
            "panfletos": True,
            "produtos": True,
            "cupons": True,
            "integracoes": True,
            "crm": True,
            "assistente_ia": "Básico",
            "tour_virtual": "Básico",
            "layouts_vitrine": 6,
            "widgets": 7,
            "imagens_por_produto": 3,
        },
    },
    {
        "slug": "premium",
        "name": "Premium",
        "price": 2200.0,
        "interval": "mensal",
        "popular": False,
        "active": True,
        "description": "Alto volume de panfletos e produtos com suporte prioritário.",
        "limits": {"flyers": 100, "products": 120, "storage": 5 * GB, "integrations": 2},
        "features": {
            "vitrine": True,
            "panfletos": True,
            "produtos": True,
            "cupons": True,
            "integracoes": True,
            "crm": True,
            "assistente_ia": "Completo",
            "tour_virtual": "Completo",
            "layouts_vitrine": 8,
            "widgets": 10,
            "imagens_por_produto": 5,
        },
    },
    {
        "slug": "empresarial",
        "name": "Empresarial",
        # custom pricing ("entre em contato")
        "price": None,
        "interval": "mensal",
        "popular": False,
        "active": True,
        "description": "Planos sob medida para redes e franquias.",
        "limits": {"flyers": 200, "products": 400, "storage": 20 * GB, "integrations": 4},
        "features": {
            "vitrine": True,
            "panfletos": True,
            "produtos": True,
            "cupons": True,
            "integracoes": True,
            "crm": True,
            "assistente_ia": "Premium",
            "tour_virtual": "Premium",
            "layouts_vitrine": 12,
            "widgets": 12,
            "imagens_por_produto": 5,
        },
    },
]


def _price_sort_key(plan: dict):
    price = plan.get("price")
    # custom-priced plans go last
    return (price is None, price if price is not None else 0.0)


def has_feature(plan: Optional[dict], feature: str) -> bool:
    return bool(((plan or {}).get("features") or {}).get(feature, False))


class PlanCatalog:
    """
    Read-only plan reference data.

    Plans come from the `planos` collection once it has been seeded with
    active plans; until then the static DEFAULT_PLANS table is used.
    """

    def __init__(self, db=None):
        self.db = db

    def _collection(self):
        return self.db.get_collection(COLLECTIONS["PLANS"])

    def _stored_plans(self) -> list:
        if self.db is None:
            return []
        return list(self._collection().find({"active": True}))

    def _plans(self) -> list:
        stored = self._stored_plans()
        if stored:
            return stored
        return copy.deepcopy(DEFAULT_PLANS)

    def list_plans(self) -> list:
        """Active plans ordered by price ascending."""
        return sorted(self._plans(), key=_price_sort_key)

    def get_plan_by_slug(self, slug) -> Optional[dict]:
        if not slug:
            return None
        slug = str(slug)
        plans = self._plans()

        for plan in plans:
            if plan.get("slug") == slug or str(plan.get("_id", "")) == slug:
                return plan

        wanted = slug.lower()
        wanted_normalized = normalize_name(slug)
        for plan in plans:
            name = plan.get("name") or ""
            if (plan.get("slug") or "").lower() == wanted or name.lower() == wanted:
                return plan
            if normalize_name(name) == wanted_normalized:
                return plan
        return None

    def get_free_plan(self) -> dict:
        plan = self.get_plan_by_slug(FREE_PLAN_SLUG)
        if plan:
            return plan
        plans = self.list_plans()
        if plans:
            return plans[0]
        return copy.deepcopy(DEFAULT_PLANS[0])

    def seed_plans(self) -> dict:
        """Upsert DEFAULT_PLANS by slug. Safe to run repeatedly."""
        log_tag = "[plan_catalog.py][PlanCatalog][seed_plans]"
        now = datetime.utcnow()
        created, updated = 0, 0

        for plan in DEFAULT_PLANS:
            result = self._collection().update_one(
                {"slug": plan["slug"]},
                {
                    "$set": {**copy.deepcopy(plan), "updated_at": now},
                    "$setOnInsert": {"created_at": now},
                },
                upsert=True,
            )
            if result.upserted_id is not None:
                created += 1
            elif result.modified_count:
                updated += 1

        Log.info(f"{log_tag} plans seeded: created={created} updated={updated}")
        return {"created": created, "updated": updated, "total": len(DEFAULT_PLANS)}
