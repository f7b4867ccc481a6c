# app/infra/sources/foodrepo.py
import os
from typing import Any, Dict, List, Optional

from app.domain.models import Product
from app.domain.normalizer import normalize, tokenize
from app.domain.numbers import parse_number
from app.infra.sources.base import HttpProductSource, kcal_from_kj, pick

BASE = os.getenv("FOODREPO_BASE_URL", "https://www.foodrepo.org/api/v3")
WEB = os.getenv("FOODREPO_WEB_URL", "https://www.foodrepo.org")
API_KEY = os.getenv("FOODREPO_API_KEY", "")

_LANGS = ("en", "de", "fr", "it")
_SEARCH_FIELDS = [
    "display_name_translations.*",
    "name_translations.*",
    "brand.name",
    "category_translations.*",
]


def _translated(d: Any) -> Optional[str]:
    if isinstance(d, str):
        return d or None
    if not isinstance(d, dict):
        return None
    for lang in _LANGS:
        if str(d.get(lang) or "").strip():
            return d[lang]
    for v in d.values():
        if str(v or "").strip():
            return v
    return None


def _texts(d: Any) -> List[str]:
    if isinstance(d, dict):
        return [str(v) for v in d.values() if v]
    return [str(d)] if d else []


def _matches(query: str, it: dict) -> bool:
    """Every query token must occur in a name, brand or category text of the row."""
    b = it.get("brand")
    hay = normalize(" ".join(
        _texts(it.get("display_name_translations")) + _texts(it.get("name_translations"))
        + _texts(it.get("name")) + _texts(pick(b, "name") if isinstance(b, dict) else b)
        + _texts(it.get("brand_name")) + _texts(it.get("category_translations"))
    ))
    return all(t in hay for t in tokenize(query))


def _nutrient(nutrients: Dict[str, Any], key: str, per: str = "per_hundred") -> Optional[float]:
    n = nutrients.get(key)
    if isinstance(n, dict):
        return parse_number(n.get(per))
    return None


class FoodRepoSource(HttpProductSource):
    """Branded product repository; bearer token optional."""
    name = "FoodRepo"

    def __init__(self, base_url: str = BASE, api_key: str = API_KEY, **kw):
        super().__init__(**kw)
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key

    async def _search(self, query: str) -> List[Any]:
        headers = {"Authorization": f"Bearer {self.api_key}"} if self.api_key else {}
        payload = {
            "size": self.page_size,
            "query": {"multi_match": {
                "query": query,
                "fields": _SEARCH_FIELDS,
                "operator": "and",
            }},
        }
        async with self._client(headers) as c:
            res = await c.post(f"{self.base_url}/products/_search", json=payload)
            res.raise_for_status()
            body = res.json()
        hits = (body.get("hits") or {}).get("hits") or []
        rows = [h.get("_source") for h in hits if isinstance(h, dict)]
        return [r for r in rows if isinstance(r, dict) and _matches(query, r)]

    def _map(self, it: dict) -> Optional[Product]:
        name = _translated(it.get("display_name_translations")) or _translated(it.get("name_translations")) \
            or pick(it, "name")
        b = it.get("brand")
        brand = pick(b, "name") if isinstance(b, dict) else (b or pick(it, "brand_name"))

        nutrients = it.get("nutrients") or {}
        kcal = _nutrient(nutrients, "energy_kcal")
        if kcal is None:
            kcal = kcal_from_kj(_nutrient(nutrients, "energy"))

        # first non-null origin field wins
        origin = pick(it, "origin") or _translated(it.get("origin_translations")) \
            or pick(it, "country", "countries")

        pid = pick(it, "id")
        return Product(
            id=f"foodrepo-{pid}" if pid is not None else None,
            brand=brand,
            product=name,
            type=self.types.infer(name, _translated(it.get("category_translations"))),
            price_per_kg=None,
            serving_size_g=pick(it, "portion_quantity"),
            protein_per_100g=_nutrient(nutrients, "protein"),
            calories_per_100g=kcal,
            calories_per_serving=_nutrient(nutrients, "energy_kcal", "per_portion"),
            carbs_per_serving=_nutrient(nutrients, "carbohydrates", "per_portion"),
            fat_per_serving=_nutrient(nutrients, "fat", "per_portion"),
            origin=origin,
            source=self.name,
            url=pick(it, "url") or (f"{WEB.rstrip('/')}/en/products/{pid}" if pid is not None else None),
        )
