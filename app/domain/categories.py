# app/domain/categories.py
import re
from typing import Iterable, Optional, Tuple

from app.domain.normalizer import normalize
from app.domain.vocabulary import DEFAULT_TYPE_RULES


class TypeInferrer:
    """Coarse category (Isolate/Casein/Vegan/Whey) from free text; '' when nothing fits."""

    def __init__(self, rules: Iterable[Tuple[str, str]] = DEFAULT_TYPE_RULES):
        self._rules = [(re.compile(p, re.IGNORECASE), label) for p, label in rules]

    def infer(self, *texts: Optional[str]) -> str:
        hay = normalize(" ".join(str(t) for t in texts if t))
        if not hay:
            return ""
        for pat, label in self._rules:
            if pat.search(hay):
                return label
        return ""
