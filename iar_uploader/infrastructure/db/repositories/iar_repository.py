from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import Table

from iar_uploader.core.constants import DATE_COLUMNS, IAR_COLUMNS
from iar_uploader.core.exceptions import RecordWriteError
from iar_uploader.core.logging import get_logger
from iar_uploader.infrastructure.db.connection import DatabaseManager
from iar_uploader.infrastructure.db.tables import get_iar_table
from iar_uploader.schemas.iar import IarRecord
from iar_uploader.utils.date_utils import parse_date

logger = get_logger(__name__)


class IarRepository:
    """Writes normalized IAR records to the destination table."""

    def __init__(self, database_manager: DatabaseManager, table_name: Optional[str] = None):
        self.database_manager = database_manager
        self.table: Table = get_iar_table(table_name or database_manager.settings.iar_table_name)

    def to_db_row(self, record: IarRecord, row_number: int) -> Dict[str, Any]:
        """
        Column values for one record. Date strings become dates here.

        Raises:
            RecordWriteError: a date string the destination would not accept
        """
        values = record.model_dump(include=set(IAR_COLUMNS))
        for column in DATE_COLUMNS:
            raw = values.get(column)
            if raw is None:
                continue
            parsed = parse_date(raw)
            if parsed is None:
                raise RecordWriteError(
                    f"Row {row_number}: {column} value {raw!r} is not a valid date",
                    row_number=row_number,
                    field=column,
                    value=raw,
                )
            values[column] = parsed
        return values

    def bulk_insert(self, records: Sequence[IarRecord]) -> int:
        """
        Insert every record in one statement and one transaction.

        Nothing is committed unless the whole batch is written.
        Returns the number of rows inserted.
        """
        if not records:
            return 0

        rows: List[Dict[str, Any]] = [
            self.to_db_row(record, row_number)
            for row_number, record in enumerate(records, start=1)
        ]
        with self.database_manager.begin() as connection:
            connection.execute(self.table.insert(), rows)

        logger.info("Inserted %d rows into %s", len(rows), self.table.name)
        return len(rows)
