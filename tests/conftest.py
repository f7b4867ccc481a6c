# tests/conftest.py
import asyncio
import json
from typing import Any, Dict, List, Optional

import pytest

from app.domain.models import Product
from app.domain.ports import ProductSourcePort
from app.infra.cache.redis_cache import RedisCache
from app.infra.repo.kv_catalog import CATALOG_KEY, KvCatalog
from app.infra.search.router import ExternalSourceRouter
from app.application.search_use_case import SearchCatalogUseCase


DEMO_CATALOG: List[Dict[str, Any]] = [
    {"id": "mp-impact-whey", "brand": "MyProtein", "product": "Impact Whey", "type": "Whey",
     "pricePerKg": 25, "servingSizeG": 30, "proteinPer100g": 82, "caloriesPerServing": 120,
     "carbsPerServing": 4, "fatPerServing": 1.8},
    {"id": "on-gold-standard", "brand": "Optimum Nutrition", "product": "Gold Standard Whey", "type": "Whey",
     "pricePerKg": 32, "servingSizeG": 30, "proteinPer100g": 79, "caloriesPerServing": 120,
     "carbsPerServing": 3, "fatPerServing": 1.5},
    {"id": "bulk-vegan", "brand": "Bulk", "product": "Vegan Protein Powder", "type": "Vegan",
     "pricePerKg": 28, "servingSizeG": 35, "proteinPer100g": 77, "caloriesPerServing": 134,
     "carbsPerServing": 2.3, "fatPerServing": 2.4},
    {"id": "dym-iso100", "brand": "Dymatize", "product": "ISO100", "type": "Isolate",
     "pricePerKg": 40, "servingSizeG": 30, "proteinPer100g": 84, "caloriesPerServing": 110,
     "carbsPerServing": 2, "fatPerServing": 0.5},
]


class FakeRedisClient:
    """Just enough of redis.asyncio.Redis for RedisCache."""
    def __init__(self, data: Optional[Dict[str, str]] = None, fail: bool = False):
        self.data = dict(data or {})
        self.ttl: Dict[str, Optional[int]] = {}
        self.fail = fail

    def _check(self):
        if self.fail:
            raise ConnectionError("redis down")

    async def get(self, key):
        self._check()
        return self.data.get(key)

    async def set(self, key, value, ex=None):
        self._check()
        self.data[key] = value
        self.ttl[key] = ex
        return True

    async def ping(self):
        self._check()
        return True


class FakeSource(ProductSourcePort):
    def __init__(self, name: str, products=None, exc: Optional[BaseException] = None, delay: float = 0.0):
        self.name = name
        self.products = [p if isinstance(p, Product) else Product.model_validate(p) for p in (products or [])]
        self.exc = exc
        self.delay = delay
        self.calls: List[str] = []

    async def fetch(self, query: str) -> List[Product]:
        self.calls.append(query)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.exc is not None:
            raise self.exc
        return list(self.products)


@pytest.fixture
def demo_catalog():
    return [dict(p) for p in DEMO_CATALOG]


@pytest.fixture
def make_store():
    def _make(rows: Any = None, raw: Optional[str] = None, fail: bool = False) -> RedisCache:
        data = {}
        if raw is not None:
            data[CATALOG_KEY] = raw
        elif rows is not None:
            data[CATALOG_KEY] = json.dumps(rows)
        return RedisCache(client=FakeRedisClient(data, fail=fail))
    return _make


@pytest.fixture
def fake_source():
    return FakeSource


@pytest.fixture
def make_uc(make_store, demo_catalog):
    def _make(rows: Any = None, sources=(), **kw) -> SearchCatalogUseCase:
        store = make_store(demo_catalog if rows is None else rows)
        return SearchCatalogUseCase(
            catalog=KvCatalog(store),
            sources=ExternalSourceRouter(list(sources), timeout=kw.pop("timeout", 1.0)),
            **kw,
        )
    return _make
