# app/infra/search/router.py
from __future__ import annotations

import asyncio
import logging
from typing import List, Optional, Sequence

from app.domain.models import Product
from app.domain.ports import ProductSourcePort
from app.infra.sources.base import EXTERNAL_TIMEOUT

log = logging.getLogger("proteincompare.sources")


class ExternalSourceRouter:
    """
    Fan-out to every external source concurrently and wait for all of them.
    Each call is bounded by its own timeout and any failure becomes []
    at the task boundary, so one slow or broken source never cancels the rest.
    Result sets come back in source order.
    """
    def __init__(self, sources: Sequence[ProductSourcePort], timeout: Optional[float] = None):
        self.sources = list(sources)
        self.timeout = timeout or EXTERNAL_TIMEOUT

    async def _safe_call(self, src: ProductSourcePort, query: str) -> List[Product]:
        try:
            return list(await asyncio.wait_for(src.fetch(query), timeout=self.timeout))
        except asyncio.CancelledError:
            raise
        except asyncio.TimeoutError:
            log.warning("[%s] timed out after %.1fs", src.name, self.timeout)
            return []
        except Exception:
            log.exception("[%s] failed", src.name)
            return []

    async def search_all(self, query: str) -> List[List[Product]]:
        if not self.sources:
            return []
        return list(await asyncio.gather(*(self._safe_call(s, query) for s in self.sources)))

    def describe(self) -> dict:
        return {s.name: s.configured for s in self.sources}
