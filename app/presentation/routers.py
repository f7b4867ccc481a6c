# app/presentation/routers.py
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from app.application.commands import SearchCommand
from app.application.search_use_case import SearchCatalogUseCase
from app.container import get_search_use_case
from app.presentation.schemas import SearchResponse

logger = logging.getLogger("proteincompare.search")

router = APIRouter()


# ── SEARCH ────────────────────────────────────────────────────────
@router.get("/search", response_model=SearchResponse)
async def search_products(
    q: Optional[str] = Query(None, description="Free text; empty returns the whole catalog"),
    type: Optional[str] = Query(None, description="Substring filter on product type"),
    sort: Optional[str] = Query(None, description="price | protein | calories"),
    external: Optional[str] = Query(None, description='"1" forces external sources'),
    limit: Optional[str] = Query(None, description="Positive integer, clamped"),
    uc: SearchCatalogUseCase = Depends(get_search_use_case),
):
    # raw strings on purpose: a bad limit/sort must never turn into a 422
    cmd = SearchCommand.from_params(q=q, type=type, sort=sort, external=external, limit=limit)
    try:
        out = await uc.run(cmd)
    except Exception:
        logger.exception("search failed q=%r; answering with empty results", cmd.q)
        out = {"results": []}
    return JSONResponse(status_code=200, content=out)
