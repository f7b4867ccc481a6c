# app/presentation/schemas.py
from __future__ import annotations
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional, Literal

SortKey = Literal["price", "protein", "calories"]


class ProductOut(BaseModel):
    """Documentation shape of one result; responses are emitted as plain dicts with every key present."""
    id: Optional[str] = None
    brand: Optional[str] = None
    product: Optional[str] = None
    type: str = ""
    pricePerKg: Optional[float] = None
    servingSizeG: Optional[float] = None
    proteinPer100g: Optional[float] = None
    caloriesPer100g: Optional[float] = None
    caloriesPerServing: Optional[float] = None
    carbsPerServing: Optional[float] = None
    fatPerServing: Optional[float] = None
    origin: Optional[str] = Field(None, description="Always present, null when unknown")
    sweeteners: Any = None
    allergens: Any = None
    rating: Any = None
    source: Optional[str] = Field(None, description="KV | OpenFoodFacts | FoodRepo | OpenSupplementDB")
    url: Optional[str] = None


class SearchResponse(BaseModel):
    results: List[Dict[str, Any]] = Field(default_factory=list, description="List of ProductOut")


class ReadinessResponse(BaseModel):
    ok: bool
    kv: bool
    kv_error: Optional[str] = None
    catalog_size: int = 0
    sources: Dict[str, bool] = {}
