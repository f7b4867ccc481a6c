# app/domain/services/sort_filter.py
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from app.domain.models import Product
from app.domain.services.merger import type_matches


def _asc(attr: str) -> Callable[[Product], Tuple[bool, float]]:
    def key(p: Product):
        v = getattr(p, attr)
        return (v is None, v if v is not None else 0.0)
    return key


def _desc(attr: str) -> Callable[[Product], Tuple[bool, float]]:
    def key(p: Product):
        v = getattr(p, attr)
        return (v is None, -v if v is not None else 0.0)
    return key


SORT_KEYS: Dict[str, Callable[[Product], Tuple[bool, float]]] = {
    "price": _asc("price_per_kg"),
    "protein": _desc("protein_per_100g"),
    "calories": _asc("calories_per_100g"),
}


def apply(results: Sequence[Product], type_filter: Optional[str] = None, sort_key: Optional[str] = None) -> List[Product]:
    out = [p for p in results if type_matches(p, type_filter)]
    key = SORT_KEYS.get((sort_key or "").strip().lower())
    if key is not None:
        out = sorted(out, key=key)  # stable; nulls last
    return out
