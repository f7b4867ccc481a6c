# app/infra/config/vocabulary_loader.py
import os
import logging
from typing import Any, Iterable, Optional, Tuple

import yaml

from app.domain.vocabulary import DEFAULT_ALIASES, DEFAULT_TYPE_RULES, SearchVocabulary

log = logging.getLogger("proteincompare.vocab")


def _pairs(raw: Any, default: Tuple[Tuple[str, str], ...], a: str, b: str) -> Tuple[Tuple[str, str], ...]:
    """
    Accepts either a list of {a: .., b: ..} mappings (ordered) or a plain
    mapping {a_value: b_value} (YAML keeps insertion order).
    """
    if raw is None:
        return default
    items: Iterable
    if isinstance(raw, dict):
        items = raw.items()
    elif isinstance(raw, list):
        items = [(r.get(a), r.get(b)) for r in raw if isinstance(r, dict)]
    else:
        log.warning("vocabulary section has unexpected type %s, using defaults", type(raw).__name__)
        return default
    out = tuple((str(k), str(v)) for k, v in items if k not in (None, "") and v is not None)
    return out or default


def load_vocabulary(cfg_path: Optional[str] = None) -> SearchVocabulary:
    path = cfg_path or os.getenv("SEARCH_VOCAB_CFG", "config/search.yaml")
    cfg = {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        log.warning("load %s failed: %s, using built-in vocabulary", path, e)
    if not isinstance(cfg, dict):
        log.warning("%s is not a mapping, using built-in vocabulary", path)
        cfg = {}

    return SearchVocabulary(
        aliases=_pairs(cfg.get("aliases"), DEFAULT_ALIASES, "alias", "canonical"),
        type_rules=_pairs(cfg.get("type_rules"), DEFAULT_TYPE_RULES, "pattern", "type"),
    )
