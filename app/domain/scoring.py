# app/domain/scoring.py
from __future__ import annotations

from typing import List, Sequence, Tuple

from app.domain.models import Product
from app.domain.normalizer import normalize

PHRASE_MIN_LEN = 3


def _fields(p: Product) -> Tuple[str, str, str, str]:
    brand = normalize(p.brand)
    name = normalize(p.product)
    ptype = normalize(p.type)
    hay = normalize(f"{p.brand or ''} {p.product or ''} {p.type or ''}")
    return brand, name, ptype, hay


def score(p: Product, tokens: Sequence[str], expanded_query: str) -> int:
    """
    Additive relevance score; every rule is independent.

      per token:  +2 in haystack, +2 brand prefix, +1 in name, +1 in type
      phrase:     +3 whole expanded query (>= 3 chars) inside the haystack
      brand-only: +2 single-token query found inside the brand
    """
    brand, name, ptype, hay = _fields(p)
    s = 0
    for t in tokens:
        if not t:
            continue
        if t in hay:
            s += 2
        if brand.startswith(t):
            s += 2
        if t in name:
            s += 1
        if t in ptype:
            s += 1

    if len(expanded_query) >= PHRASE_MIN_LEN and expanded_query in hay:
        s += 3

    if len(tokens) == 1 and tokens[0] and tokens[0] in brand:
        s += 2
    return s


def rank(catalog: Sequence[Product], tokens: Sequence[str], expanded_query: str) -> List[Product]:
    scored = [(score(p, tokens, expanded_query), p) for p in catalog]
    # sorted() is stable: equal scores keep catalog order
    scored = sorted((sp for sp in scored if sp[0] > 0), key=lambda sp: sp[0], reverse=True)
    return [p for _, p in scored]


def substring_fallback(catalog: Sequence[Product], expanded_query: str) -> List[Product]:
    """Raw substring scan over brand/product, catalog order, no scoring."""
    if not expanded_query:
        return []
    return [
        p for p in catalog
        if expanded_query in normalize(p.brand) or expanded_query in normalize(p.product)
    ]
