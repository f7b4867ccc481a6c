# app/domain/services/merger.py
from itertools import chain
from typing import Iterable, List, Optional, Sequence

from app.domain.models import Product
from app.domain.normalizer import normalize


def dedup_key(p: Product) -> str:
    return f"{normalize(p.brand)}|{normalize(p.product)}"


def type_matches(p: Product, type_filter: Optional[str]) -> bool:
    f = normalize(type_filter)
    return not f or f in normalize(p.type)


def merge(
    primary: Sequence[Product],
    external_sets: Iterable[Sequence[Product]],
    type_filter: Optional[str] = None,
) -> List[Product]:
    """
    Catalog results first, untouched; external items appended in adapter order.
    An external item is dropped if its brand|product key was already seen,
    either in the catalog results or in an earlier external item.
    """
    out: List[Product] = list(primary)
    seen = {dedup_key(p) for p in primary}
    for item in chain.from_iterable(external_sets):
        if not type_matches(item, type_filter):
            continue
        key = dedup_key(item)
        if key in seen:
            continue
        seen.add(key)
        out.append(item)
    return out
