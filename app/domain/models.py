# app/domain/models.py
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.domain.numbers import parse_number

UNKNOWN_PRODUCT = "Unknown product"

NUMERIC_FIELDS = (
    "price_per_kg",
    "serving_size_g",
    "protein_per_100g",
    "calories_per_100g",
    "calories_per_serving",
    "carbs_per_serving",
    "fat_per_serving",
)


def _as_text(v: Any) -> Optional[str]:
    if v is None:
        return None
    if isinstance(v, str):
        v = v.strip()
        return v or None
    if isinstance(v, (list, tuple)):
        parts = [str(x).strip() for x in v if x not in (None, "")]
        return ", ".join(p for p in parts if p) or None
    if isinstance(v, (int, float)) and not isinstance(v, bool):
        return str(v)
    return None


class Product(BaseModel):
    """
    Common shape for catalog entries and everything the external sources return.
    Accepts camelCase (wire) or snake_case (python) keys; always dumps camelCase.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: Optional[str] = None
    brand: Optional[str] = None
    product: Optional[str] = None
    type: str = ""
    price_per_kg: Optional[float] = Field(None, alias="pricePerKg")
    serving_size_g: Optional[float] = Field(None, alias="servingSizeG")
    protein_per_100g: Optional[float] = Field(None, alias="proteinPer100g")
    calories_per_100g: Optional[float] = Field(None, alias="caloriesPer100g")
    calories_per_serving: Optional[float] = Field(None, alias="caloriesPerServing")
    carbs_per_serving: Optional[float] = Field(None, alias="carbsPerServing")
    fat_per_serving: Optional[float] = Field(None, alias="fatPerServing")
    origin: Optional[str] = None
    sweeteners: Any = None
    allergens: Any = None
    rating: Any = None
    source: Optional[str] = None
    url: Optional[str] = None

    @field_validator(*NUMERIC_FIELDS, mode="before")
    @classmethod
    def _finite_or_none(cls, v: Any) -> Optional[float]:
        return parse_number(v)

    @field_validator("id", "brand", "product", "origin", "source", "url", mode="before")
    @classmethod
    def _text_or_none(cls, v: Any) -> Optional[str]:
        return _as_text(v)

    @field_validator("type", mode="before")
    @classmethod
    def _type_text(cls, v: Any) -> str:
        return _as_text(v) or ""

    @property
    def identifiable(self) -> bool:
        return bool(self.brand or self.product)

    def to_public(self) -> Dict[str, Any]:
        # every key is emitted, so "origin" is present even when null
        return self.model_dump(by_alias=True)
