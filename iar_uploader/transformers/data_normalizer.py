# ==============================================
# iar_uploader/transformers/data_normalizer.py
# ==============================================
from dataclasses import dataclass
from enum import Enum
from functools import partial
from typing import Any, Callable, Dict, Iterable, List, Mapping

from iar_uploader.core.constants import IAR_COLUMNS
from iar_uploader.schemas.iar import IarRecord
from iar_uploader.core.logging import get_logger

from .data_cleaner import clean_amount, clean_date, clean_text

logger = get_logger(__name__)


class FieldKind(Enum):
    """How a destination field is cleaned"""
    TEXT = "text"
    REQUIRED_TEXT = "required_text"  # blank cell -> NULL
    DATE = "date"
    AMOUNT = "amount"


@dataclass(frozen=True)
class FieldNormalizationRule:
    """Cleaning applied to one destination field, read from the column of the same name"""
    field_name: str
    kind: FieldKind


_CLEANERS: Dict[FieldKind, Callable[[Any], Any]] = {
    FieldKind.TEXT: clean_text,
    FieldKind.REQUIRED_TEXT: partial(clean_text, blank_as_null=True),
    FieldKind.DATE: clean_date,
    FieldKind.AMOUNT: clean_amount,
}

FIELD_KINDS: Dict[str, FieldKind] = {
    "purchase_order_no": FieldKind.REQUIRED_TEXT,
    "date_of_delivery": FieldKind.DATE,
    "date_of_preparation_of_iar": FieldKind.DATE,
    "iar_amount": FieldKind.AMOUNT,
}

DEFAULT_RULES: List[FieldNormalizationRule] = [
    FieldNormalizationRule(name, FIELD_KINDS.get(name, FieldKind.TEXT))
    for name in IAR_COLUMNS
]


class DataNormalizer:
    """
    Turns parsed CSV rows into `IarRecord`s.

    Each destination field is looked up by exact header name. A missing column
    gives None for that field and a value that fails to clean becomes None;
    no row is ever dropped.
    """

    def __init__(self, rules: Iterable[FieldNormalizationRule] = DEFAULT_RULES):
        self.rules = list(rules)

    def normalize_row(self, row: Mapping[str, Any]) -> IarRecord:
        values = {
            rule.field_name: _CLEANERS[rule.kind](row.get(rule.field_name))
            for rule in self.rules
        }
        return IarRecord(**values)

    def normalize_rows(self, rows: Iterable[Mapping[str, Any]]) -> List[IarRecord]:
        records = [self.normalize_row(row) for row in rows]
        logger.debug("Normalized %d rows", len(records))
        return records


def normalize_row(row: Mapping[str, Any]) -> IarRecord:
    return DataNormalizer().normalize_row(row)


def normalize_rows(rows: Iterable[Mapping[str, Any]]) -> List[IarRecord]:
    return DataNormalizer().normalize_rows(rows)
