from functools import lru_cache

from sqlalchemy import Column, Date, MetaData, Numeric, Table, Unicode, UnicodeText


@lru_cache
def get_iar_table(name: str = "iar_2025_monitoring") -> Table:
    """
    Column layout of the IAR monitoring table.

    The table is created and owned outside this application; the definition
    only drives inserts (and table creation in tests).
    """
    return Table(
        name,
        MetaData(),
        Column("purchase_order_no", Unicode(50), nullable=True),
        Column("date_of_delivery", Date, nullable=True),
        Column("date_of_preparation_of_iar", Date, nullable=True),
        Column("prepared_by", Unicode(150), nullable=True),
        Column("iar_no", Unicode(50), nullable=True),
        Column("particulars", UnicodeText, nullable=True),
        Column("iar_amount", Numeric(18, 2), nullable=True),
        Column("timeline_10wd", Unicode(50), nullable=True),
        Column("supplier_name", Unicode(200), nullable=True),
        Column("delivery_status", Unicode(50), nullable=True),
    )
