# app/domain/aliases.py
import re
from typing import Iterable, Tuple

from app.domain.normalizer import normalize
from app.domain.vocabulary import DEFAULT_ALIASES


class AliasExpander:
    """
    Rewrites nicknames in an already-normalized query ("on" -> "optimum nutrition").

    All keys are compiled into one alternation in table order and applied in a
    single pass, so the first key that matches at a position owns that span and
    replaced text is never expanded again. Keys only match on word boundaries.
    """

    def __init__(self, aliases: Iterable[Tuple[str, str]] = DEFAULT_ALIASES):
        self._table: dict[str, str] = {}
        for key, value in aliases:
            k = normalize(key)
            if k and k not in self._table:
                self._table[k] = normalize(value)

        if self._table:
            alternation = "|".join(re.escape(k) for k in self._table)
            self._pattern = re.compile(rf"(?<!\w)(?:{alternation})(?!\w)")
        else:
            self._pattern = None

    def expand(self, normalized_text: str) -> str:
        if not normalized_text or self._pattern is None:
            return normalized_text or ""
        return self._pattern.sub(lambda m: self._table[m.group(0)], normalized_text)
