from decimal import Decimal
from typing import Optional

from sqlmodel import Field, SQLModel


class IarRecord(SQLModel):
    """One normalized row bound for the iar monitoring table."""

    purchase_order_no: Optional[str] = Field(default=None)
    date_of_delivery: Optional[str] = Field(default=None, description="Date string, checked at write time")
    date_of_preparation_of_iar: Optional[str] = Field(default=None, description="Date string, checked at write time")
    prepared_by: Optional[str] = Field(default=None)
    iar_no: Optional[str] = Field(default=None)
    particulars: Optional[str] = Field(default=None)
    iar_amount: Optional[Decimal] = Field(default=None, description="DECIMAL(18,2) in the destination")
    timeline_10wd: Optional[str] = Field(default=None)
    supplier_name: Optional[str] = Field(default=None)
    delivery_status: Optional[str] = Field(default=None)
