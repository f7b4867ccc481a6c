# app/application/commands.py
from typing import Any, Optional

from pydantic import BaseModel

from app.domain.numbers import parse_number

EXTERNAL_FLAG = "1"


def parse_limit(raw: Any) -> Optional[int]:
    """Lenient: None when missing or unparseable, otherwise an int (may be out of range)."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    s = str(raw).strip()
    if not s:
        return None
    try:
        return int(s)
    except ValueError:
        num = parse_number(s)
        return int(num) if num is not None else None


class SearchCommand(BaseModel):
    q: str = ""
    type: Optional[str] = None
    sort: Optional[str] = None
    external: bool = False
    limit: Optional[int] = None

    @classmethod
    def from_params(
        cls,
        q: Optional[str] = None,
        type: Optional[str] = None,
        sort: Optional[str] = None,
        external: Optional[str] = None,
        limit: Optional[str] = None,
    ) -> "SearchCommand":
        return cls(
            q=(q or "").strip(),
            type=(type or "").strip() or None,
            sort=(sort or "").strip().lower() or None,
            external=(external or "").strip() == EXTERNAL_FLAG,
            limit=parse_limit(limit),
        )
