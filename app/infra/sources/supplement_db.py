# app/infra/sources/supplement_db.py
import os
import logging
from typing import Any, List, Optional

from app.domain.models import Product
from app.domain.normalizer import normalize
from app.domain.ports import CachePort
from app.infra.sources.base import HttpProductSource, pick

URL = os.getenv("SUPPLEMENT_DB_URL", "")
CACHE_KEY = "cache:supplement-db"
CACHE_TTL = int(os.getenv("SUPPLEMENT_DB_CACHE_TTL", "3600"))

log = logging.getLogger("proteincompare.sources")


def _rows(doc: Any) -> List[Any]:
    if isinstance(doc, dict):
        doc = doc.get("products") or doc.get("items") or doc.get("data") or []
    return doc if isinstance(doc, list) else []


class SupplementDbSource(HttpProductSource):
    """
    Community-maintained supplement list: one static JSON document, filtered here.
    The document is cached in the KV store; cache trouble just means a direct fetch.
    """
    name = "OpenSupplementDB"

    def __init__(self, url: str = URL, cache: Optional[CachePort] = None, cache_ttl: int = CACHE_TTL, **kw):
        super().__init__(**kw)
        self.url = url
        self.cache = cache
        self.cache_ttl = cache_ttl

    @property
    def configured(self) -> bool:
        return bool(self.url)

    async def _document(self) -> List[Any]:
        if self.cache is not None:
            try:
                cached = await self.cache.get(CACHE_KEY)
                if cached:
                    return _rows(cached)
            except Exception as e:
                log.warning("[%s] cache read failed: %s", self.name, e)

        async with self._client() as c:
            res = await c.get(self.url)
            res.raise_for_status()
            rows = _rows(res.json())

        if self.cache is not None and rows:
            try:
                await self.cache.set(CACHE_KEY, rows, ttl=self.cache_ttl)
            except Exception as e:
                log.warning("[%s] cache write failed: %s", self.name, e)
        return rows

    async def _search(self, query: str) -> List[Any]:
        q = normalize(query)
        hits = []
        for row in await self._document():
            if not isinstance(row, dict):
                continue
            hay = normalize(" ".join(str(v) for v in (
                pick(row, "product", "name", "productName", "product_name"),
                pick(row, "brand", "brandName", "brand_name", "manufacturer"),
                pick(row, "type", "category"),
            ) if v))
            if q in hay:
                hits.append(row)
        return hits

    def _map(self, d: dict) -> Optional[Product]:
        name = pick(d, "product", "name", "productName", "product_name")
        brand = pick(d, "brand", "brandName", "brand_name", "manufacturer")
        return Product(
            id=pick(d, "id", "slug"),
            brand=brand,
            product=name,
            type=pick(d, "type", "category") or self.types.infer(name),
            price_per_kg=pick(d, "pricePerKg", "price_per_kg", "price_kg"),
            serving_size_g=pick(d, "servingSizeG", "serving_size_g", "serving_size"),
            protein_per_100g=pick(d, "proteinPer100g", "protein_content", "protein_per_100g"),
            calories_per_100g=pick(d, "caloriesPer100g", "calories_per_100g", "energy_kcal_100g"),
            calories_per_serving=pick(d, "caloriesPerServing", "calories_per_serving", "calories"),
            carbs_per_serving=pick(d, "carbsPerServing", "carbs_per_serving", "carbs"),
            fat_per_serving=pick(d, "fatPerServing", "fat_per_serving", "fat"),
            origin=pick(d, "origin", "country"),
            sweeteners=d.get("sweeteners"),
            allergens=d.get("allergens"),
            rating=d.get("rating"),
            source=self.name,
            url=pick(d, "url", "link"),
        )
