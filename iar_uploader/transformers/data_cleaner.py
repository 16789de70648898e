import re
import unicodedata
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

_SEPARATORS = re.compile(r"[,\s]+")


def _strip_currency_symbols(value: str) -> str:
    # Unicode category Sc covers ₱, $, €, ¥ and friends
    return "".join(ch for ch in value if unicodedata.category(ch) != "Sc")


def clean_amount(value: Any) -> Optional[Decimal]:
    """
    Convert a currency formatted cell to a Decimal.

    `"₱1,250.50"` -> `Decimal("1250.50")`. Blank, missing or non-numeric input
    gives None; this never raises.
    """
    if value is None:
        return None
    s = str(value).strip()
    if not s:
        return None

    cleaned = _SEPARATORS.sub("", _strip_currency_symbols(s))
    # Decimal accepts "1_000" digit grouping; treat it as non-numeric
    if not cleaned or "_" in cleaned:
        return None
    try:
        amount = Decimal(cleaned)
    except (InvalidOperation, ValueError):
        return None
    return amount if amount.is_finite() else None


def clean_date(value: Any) -> Optional[str]:
    """Trimmed date string, or None when blank or missing. Validation happens at write time."""
    if value is None:
        return None
    s = str(value).strip()
    return s or None


def clean_text(value: Any, blank_as_null: bool = False) -> Optional[str]:
    if value is None:
        return None
    s = str(value).strip()
    if blank_as_null and not s:
        return None
    return s
