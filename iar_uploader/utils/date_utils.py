"""
Date utilities for the destination write step.
"""

from datetime import date, datetime
from typing import Optional

# Formats SQL Server accepts for a DATE column under us_english
COMMON_DATE_FORMATS = [
    "%Y-%m-%d",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%dT%H:%M:%S",
    "%Y/%m/%d",
    "%Y%m%d",
    "%m/%d/%Y",
    "%m-%d-%Y",
    "%d %b %Y",
    "%d %B %Y",
    "%b %d, %Y",
    "%B %d, %Y",
]


def parse_date(date_string: Optional[str]) -> Optional[date]:
    """
    Parse a date string against COMMON_DATE_FORMATS.

    Returns:
        The parsed date, or None when the string is blank or matches no format
    """
    if not date_string or not isinstance(date_string, str):
        return None

    date_string = date_string.strip()
    for fmt in COMMON_DATE_FORMATS:
        try:
            return datetime.strptime(date_string, fmt).date()
        except ValueError:
            continue
    return None
