# app/domain/normalizer.py
import re
import unicodedata

_WS_RE = re.compile(r"\s+")


def normalize(text) -> str:
    """
    Canonical comparison form: lower-case, accents stripped ("é" -> "e"),
    whitespace collapsed and trimmed. Idempotent.
    """
    if text is None:
        return ""
    s = unicodedata.normalize("NFKD", str(text).lower())
    s = "".join(ch for ch in s if not unicodedata.combining(ch))
    # NFKD can expose new upper-case forms (e.g. compatibility letters), lower again
    s = s.lower()
    return _WS_RE.sub(" ", s).strip()


def tokenize(text: str) -> list[str]:
    return [t for t in normalize(text).split(" ") if t]
