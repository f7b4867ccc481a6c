# app/infra/sources/openfoodfacts.py
import os
from typing import Any, List, Optional

from app.domain.models import Product
from app.domain.numbers import parse_number
from app.infra.sources.base import HttpProductSource, kcal_from_kj, pick

BASE = os.getenv("OFF_BASE_URL", "https://world.openfoodfacts.org")
FIELDS = "code,product_name,product_name_en,generic_name,brands,categories,nutriments,serving_quantity,origins,countries,url"


class OpenFoodFactsSource(HttpProductSource):
    """Open food database: name/brand search, nutrients per 100 g, no prices."""
    name = "OpenFoodFacts"

    def __init__(self, base_url: str = BASE, **kw):
        super().__init__(**kw)
        self.base_url = base_url.rstrip("/")

    async def _search(self, query: str) -> List[Any]:
        async with self._client() as c:
            res = await c.get(
                f"{self.base_url}/cgi/search.pl",
                params={
                    "search_terms": query,
                    "search_simple": 1,
                    "action": "process",
                    "json": 1,
                    "page_size": self.page_size,
                    "fields": FIELDS,
                },
            )
            res.raise_for_status()
            body = res.json()
        return body.get("products") or []

    def _map(self, it: dict) -> Optional[Product]:
        name = pick(it, "product_name", "product_name_en", "generic_name")
        brands = pick(it, "brands")
        brand = str(brands).split(",")[0].strip() if brands else None

        n = it.get("nutriments") or {}
        kcal = parse_number(pick(n, "energy-kcal_100g"))
        if kcal is None:
            kcal = kcal_from_kj(parse_number(pick(n, "energy-kj_100g", "energy_100g")))

        code = pick(it, "code")
        return Product(
            id=f"off-{code}" if code else None,
            brand=brand,
            product=name,
            type=self.types.infer(name, pick(it, "categories")),
            price_per_kg=None,
            serving_size_g=pick(it, "serving_quantity"),
            protein_per_100g=pick(n, "proteins_100g"),
            calories_per_100g=kcal,
            origin=pick(it, "origins", "countries"),
            source=self.name,
            url=pick(it, "url") or (f"{self.base_url}/product/{code}" if code else None),
        )
