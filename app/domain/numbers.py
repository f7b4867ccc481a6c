# app/domain/numbers.py
import math
import re
from typing import Any, Optional

_NON_NUMERIC = re.compile(r"[^0-9.\-]")
_LEADING_NUMBER = re.compile(r"-?(?:\d+(?:\.\d*)?|\.\d+)")


def _decimal_point(s: str) -> str:
    # the right-most of ',' and '.' is the decimal mark, the other one groups thousands
    if "," not in s:
        return s
    if "." not in s:
        return s.replace(",", ".")
    if s.rfind(".") > s.rfind(","):
        return s.replace(",", "")
    return s.replace(".", "").replace(",", ".")


def parse_number(value: Any) -> Optional[float]:
    """
    Coerce anything a data source hands us into a finite float or None.

    Strings are stripped of everything except digits, '.' and '-' and the
    leading number is kept: "32 €/kg" -> 32.0, "7,5 g" -> 7.5, "1.5-2" -> 1.5,
    "1,299.00" -> 1299.0.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            num = float(value)
        except OverflowError:
            return None
        return num if math.isfinite(num) else None
    if not isinstance(value, str):
        return None

    s = _NON_NUMERIC.sub("", _decimal_point(value))
    m = _LEADING_NUMBER.match(s)
    if not m:
        return None
    num = float(m.group(0))
    return num if math.isfinite(num) else None
