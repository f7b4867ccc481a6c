# app/application/search_use_case.py
from __future__ import annotations

import os
import time
import logging
from typing import Any, Dict, List, Optional

from app.application.commands import SearchCommand
from app.domain.aliases import AliasExpander
from app.domain.models import Product
from app.domain.normalizer import normalize
from app.domain.ports import CatalogPort
from app.domain.scoring import rank, substring_fallback
from app.domain.services import sort_filter
from app.domain.services.merger import merge, type_matches
from app.domain.vocabulary import SearchVocabulary
from app.infra.search.router import ExternalSourceRouter

DEFAULT_LIMIT = int(os.getenv("SEARCH_DEFAULT_LIMIT", "50"))
MAX_LIMIT = int(os.getenv("SEARCH_MAX_LIMIT", "10000"))

log = logging.getLogger("proteincompare.search")


class SearchCatalogUseCase:
    """
    GET /search, end to end:

      query -> normalize -> alias expand -> tokens
            -> score catalog (or substring fallback, or whole catalog for empty q)
            -> external sources when forced or when the catalog gave nothing
            -> merge/dedup -> type filter + sort -> limit -> public dicts
    """
    def __init__(
        self,
        catalog: CatalogPort,
        sources: ExternalSourceRouter,
        vocabulary: Optional[SearchVocabulary] = None,
        default_limit: int = DEFAULT_LIMIT,
        max_limit: int = MAX_LIMIT,
    ):
        self.catalog = catalog
        self.sources = sources
        vocab = vocabulary or SearchVocabulary()
        self.expander = AliasExpander(vocab.aliases)
        self.default_limit = default_limit
        self.max_limit = max_limit

    def resolve_limit(self, requested: Optional[int], catalog_size: int) -> int:
        default = max(catalog_size, self.default_limit, 1)
        upper = max(self.max_limit, default)
        if requested is None:
            return default
        return max(1, min(requested, upper))

    def primary_results(self, catalog: List[Product], query: str) -> tuple[List[Product], str, str]:
        q = normalize(query)
        expanded = self.expander.expand(q)
        if not q:
            return list(catalog), expanded, "all"
        tokens = expanded.split()
        ranked = rank(catalog, tokens, expanded)
        if ranked:
            return ranked, expanded, "scored"
        return substring_fallback(catalog, expanded), expanded, "substring"

    async def run(self, cmd: SearchCommand) -> Dict[str, Any]:
        t0 = time.monotonic()
        catalog = await self.catalog.load()

        primary, expanded, stage = self.primary_results(catalog, cmd.q)
        primary = [p for p in primary if type_matches(p, cmd.type)]

        external_sets: List[List[Product]] = []
        use_external = cmd.external or not primary
        if use_external:
            external_sets = await self.sources.search_all(expanded)

        merged = merge(primary, external_sets, cmd.type)
        final = sort_filter.apply(merged, cmd.type, cmd.sort)
        limit = self.resolve_limit(cmd.limit, len(catalog))
        results = [p.to_public() for p in final[:limit]]

        log.info(
            "search q=%r expanded=%r stage=%s catalog=%d primary=%d external=%s merged=%d returned=%d ms=%d",
            cmd.q, expanded, stage, len(catalog), len(primary),
            [len(s) for s in external_sets] if use_external else "skipped",
            len(merged), len(results), int((time.monotonic() - t0) * 1000),
        )
        return {"results": results}
