"""Tests for row normalization."""

from decimal import Decimal

from iar_uploader.core.constants import IAR_COLUMNS
from iar_uploader.transformers.data_normalizer import (
    DataNormalizer,
    FieldKind,
    FieldNormalizationRule,
    normalize_row,
    normalize_rows,
)


def _full_row(**overrides):
    row = {
        "purchase_order_no": " PO-2025-001 ",
        "date_of_delivery": "2025-01-15",
        "date_of_preparation_of_iar": " 2025-01-16",
        "prepared_by": "J. Cruz",
        "iar_no": "IAR-001",
        "particulars": "Office supplies",
        "iar_amount": "₱1,250.50",
        "timeline_10wd": "Within",
        "supplier_name": "Acme Trading",
        "delivery_status": "Delivered",
    }
    row.update(overrides)
    return row


class TestNormalizeRow:
    def test_full_row(self):
        record = normalize_row(_full_row())
        assert record.purchase_order_no == "PO-2025-001"
        assert record.date_of_delivery == "2025-01-15"
        assert record.date_of_preparation_of_iar == "2025-01-16"
        assert record.iar_amount == Decimal("1250.50")
        assert record.supplier_name == "Acme Trading"

    def test_missing_columns_are_none(self):
        record = normalize_row({"iar_no": "IAR-9"})
        assert record.iar_no == "IAR-9"
        for name in IAR_COLUMNS:
            if name != "iar_no":
                assert getattr(record, name) is None

    def test_blank_purchase_order_no_is_none(self):
        assert normalize_row(_full_row(purchase_order_no="  ")).purchase_order_no is None

    def test_other_blank_text_is_empty_string(self):
        record = normalize_row(_full_row(prepared_by="", delivery_status="   "))
        assert record.prepared_by == ""
        assert record.delivery_status == ""

    def test_bad_amount_is_none(self):
        assert normalize_row(_full_row(iar_amount="n/a")).iar_amount is None

    def test_blank_dates_are_none(self):
        record = normalize_row(_full_row(date_of_delivery="", date_of_preparation_of_iar=" "))
        assert record.date_of_delivery is None
        assert record.date_of_preparation_of_iar is None

    def test_header_match_is_exact(self):
        record = normalize_row({"Purchase_Order_No": "PO-1", "iar_no ": "IAR-1"})
        assert record.purchase_order_no is None
        assert record.iar_no is None

    def test_unknown_columns_ignored(self):
        record = normalize_row(_full_row(remarks="ignored"))
        assert "remarks" not in record.model_dump()


class TestDataNormalizer:
    def test_normalize_rows_keeps_every_row(self):
        records = normalize_rows([_full_row(), {}, _full_row(iar_amount="")])
        assert len(records) == 3
        assert records[1].purchase_order_no is None
        assert records[2].iar_amount is None

    def test_custom_rules(self):
        normalizer = DataNormalizer([FieldNormalizationRule("iar_amount", FieldKind.AMOUNT)])
        record = normalizer.normalize_row({"iar_amount": "$5", "iar_no": "IAR-1"})
        assert record.iar_amount == Decimal("5")
        assert record.iar_no is None
