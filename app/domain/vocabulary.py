# app/domain/vocabulary.py
from dataclasses import dataclass, field
from typing import Tuple

# (alias, canonical); earlier keys win when spans overlap
DEFAULT_ALIASES: Tuple[Tuple[str, str], ...] = (
    ("on", "optimum nutrition"),
    ("mp", "myprotein"),
    ("iso 100", "iso100"),
    ("gold std", "gold standard"),
    ("gsw", "gold standard whey"),
    ("dym", "dymatize"),
)

# (regex, category); first matching rule decides
DEFAULT_TYPE_RULES: Tuple[Tuple[str, str], ...] = (
    (r"iso\s?100|isolate", "Isolate"),
    (r"casein", "Casein"),
    (r"\b(?:vegan|pea|soy|rice)\b", "Vegan"),
    (r"whey", "Whey"),
)


@dataclass(frozen=True)
class SearchVocabulary:
    aliases: Tuple[Tuple[str, str], ...] = field(default=DEFAULT_ALIASES)
    type_rules: Tuple[Tuple[str, str], ...] = field(default=DEFAULT_TYPE_RULES)
