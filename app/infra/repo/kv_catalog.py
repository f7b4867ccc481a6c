# app/infra/repo/kv_catalog.py
from __future__ import annotations

import os
import json
import logging
from typing import Any, List

from pydantic import ValidationError

from app.domain.models import Product
from app.domain.ports import CachePort, CatalogPort

CATALOG_KEY = os.getenv("CATALOG_KEY", "catalog:products")
CATALOG_SOURCE_TAG = "KV"

log = logging.getLogger("proteincompare.catalog")


class KvCatalog(CatalogPort):
    """
    Catalog = one JSON array stored under CATALOG_KEY by an external writer.
    Missing key, unreachable store, or malformed JSON all degrade to [].
    """
    def __init__(self, store: CachePort, key: str = CATALOG_KEY):
        self.store = store
        self.key = key

    async def load(self) -> List[Product]:
        try:
            raw = await self.store.get_raw(self.key)
        except Exception as e:
            log.warning("catalog store unreachable key=%s err=%s", self.key, e)
            return []
        if not raw:
            return []

        try:
            data: Any = json.loads(raw)
        except (TypeError, ValueError) as e:
            log.warning("catalog blob is not valid JSON key=%s err=%s", self.key, e)
            return []

        # tolerate {"products": [...]} / {"results": [...]} wrappers
        if isinstance(data, dict):
            data = data.get("products") or data.get("results") or []
        if not isinstance(data, list):
            log.warning("catalog blob is not a list key=%s type=%s", self.key, type(data).__name__)
            return []

        out: List[Product] = []
        for i, row in enumerate(data):
            if not isinstance(row, dict):
                continue
            try:
                p = Product.model_validate(row)
            except ValidationError as e:
                log.warning("skipping catalog row %d: %s", i, e)
                continue
            if not p.source:
                p.source = CATALOG_SOURCE_TAG
            out.append(p)
        return out
