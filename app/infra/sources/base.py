# app/infra/sources/base.py
from __future__ import annotations

import os
import asyncio
import logging
from abc import abstractmethod
from typing import Any, Dict, Iterable, List, Optional

import httpx

from app.domain.categories import TypeInferrer
from app.domain.models import Product, UNKNOWN_PRODUCT
from app.domain.ports import ProductSourcePort

EXTERNAL_TIMEOUT = float(os.getenv("EXTERNAL_TIMEOUT_SECONDS", "4.0"))
PAGE_SIZE = int(os.getenv("EXTERNAL_PAGE_SIZE", "20"))
USER_AGENT = os.getenv("SOURCES_USER_AGENT", "ProteinCompare/0.1 (+search)")

KJ_TO_KCAL = 0.239006

log = logging.getLogger("proteincompare.sources")


def pick(d: Any, *keys: str) -> Any:
    """First value under `keys` that is neither None nor an empty string."""
    if not isinstance(d, dict):
        return None
    for k in keys:
        v = d.get(k)
        if v not in (None, ""):
            return v
    return None


def kcal_from_kj(kj: Optional[float]) -> Optional[float]:
    return None if kj is None else round(kj * KJ_TO_KCAL, 1)


class HttpProductSource(ProductSourcePort):
    """
    Shared plumbing for the third-party adapters.

    Subclasses implement `_search(query) -> rows` (raw JSON objects) and
    `_map(row) -> Product | None`. `fetch()` owns the failure policy:
    network errors, bad status codes and unexpected payloads all turn into [],
    and items left with neither brand nor product name are discarded.
    """
    name = "source"

    def __init__(
        self,
        *,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        types: Optional[TypeInferrer] = None,
        page_size: int = PAGE_SIZE,
    ):
        self.timeout = timeout or EXTERNAL_TIMEOUT
        self.transport = transport
        self.types = types or TypeInferrer()
        self.page_size = page_size

    def _client(self, headers: Optional[Dict[str, str]] = None) -> httpx.AsyncClient:
        h = {"User-Agent": USER_AGENT, "Accept": "application/json"}
        h.update(headers or {})
        return httpx.AsyncClient(timeout=self.timeout, headers=h, transport=self.transport)

    @abstractmethod
    async def _search(self, query: str) -> Iterable[Any]: ...

    @abstractmethod
    def _map(self, row: Any) -> Optional[Product]: ...

    @staticmethod
    def _identified(p: Optional[Product]) -> Optional[Product]:
        # brand or product must survive text cleanup; a branded item without a name gets the placeholder
        if p is None or not p.identifiable:
            return None
        if not p.product:
            p = p.model_copy(update={"product": UNKNOWN_PRODUCT})
        return p

    async def fetch(self, query: str) -> List[Product]:
        q = (query or "").strip()
        if not q or not self.configured:
            return []
        try:
            rows = await self._search(q)
            out: List[Product] = []
            for row in rows or []:
                if not isinstance(row, dict):
                    continue
                p = self._identified(self._map(row))
                if p is not None:
                    out.append(p)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            log.warning("[%s] fetch failed q=%r err=%s: %s", self.name, q, type(e).__name__, e)
            return []
        log.info("[%s] q=%r -> %d products", self.name, q, len(out))
        return out
