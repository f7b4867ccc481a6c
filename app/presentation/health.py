# app/presentation/health.py
import os
from fastapi import APIRouter, Depends

from app.container import get_cache, get_catalog, get_sources
from app.presentation.schemas import ReadinessResponse

router = APIRouter()


@router.get("/")
async def root():
    return {
        "name": "protein-compare-search",
        "version": os.getenv("APP_VERSION", "0.1.0"),
        "ok": True,
    }

@router.get("/healthz")
async def healthz():
    return {"ok": True}

@router.get("/readyz", response_model=ReadinessResponse)
async def readyz(cache=Depends(get_cache), catalog=Depends(get_catalog), sources=Depends(get_sources)):
    checks = {"ok": True, "kv": False}
    try:
        checks["kv"] = bool(await cache.ping())
    except Exception as e:
        checks["kv_error"] = str(e)
    checks["ok"] = checks["kv"]
    # loader never raises; an empty catalog is still "ready"
    checks["catalog_size"] = len(await catalog.load())
    checks["sources"] = sources.describe()
    return checks
