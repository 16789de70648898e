from dataclasses import dataclass
from typing import Optional

from iar_uploader.core.exceptions import (
    AppException,
    BadRequestError,
    InternalServerError,
    PayloadTooLargeError,
)
from iar_uploader.core.logging import audit_upload, get_logger, log_execution_time
from iar_uploader.infrastructure.db.repositories.iar_repository import IarRepository
from iar_uploader.processors.csv_processor import ParsedCsv, decode_csv_bytes, parse_csv
from iar_uploader.transformers.data_normalizer import DataNormalizer

logger = get_logger(__name__)

@dataclass(frozen=True)
class UploadResult:
    file_name: str
    inserted: int


class UploadService:
    """
    Parse, normalize and bulk insert one uploaded IAR CSV file.

    The preview and the upload share `parse_csv`, so what the page shows is what
    gets inserted.
    """

    def __init__(
        self,
        repository: IarRepository,
        normalizer: Optional[DataNormalizer] = None,
        max_upload_size: Optional[int] = None,
    ):
        self.repository = repository
        self.normalizer = normalizer or DataNormalizer()
        self.max_upload_size = max_upload_size

    def _read(self, file_name: Optional[str], content: Optional[bytes]) -> ParsedCsv:
        if content is None:
            raise BadRequestError("No file uploaded")
        if self.max_upload_size is not None and len(content) > self.max_upload_size:
            raise PayloadTooLargeError(len(content), self.max_upload_size)

        text = decode_csv_bytes(content, file_name=file_name)
        return parse_csv(text)

    def preview(self, file_name: Optional[str], content: Optional[bytes]) -> ParsedCsv:
        """Parsed headers and rows, for display before upload."""
        return self._read(file_name, content)

    @log_execution_time(logger)
    def upload(self, file_name: Optional[str], content: Optional[bytes]) -> UploadResult:
        """
        Insert every row of the file as one batch.

        Raises:
            BadRequestError: no file, or no data rows
            PayloadTooLargeError: file over the configured size
            AppException: any other failure, with status 500; nothing is inserted
        """
        name = file_name or "upload.csv"
        try:
            parsed = self._read(file_name, content)
            if not parsed.has_rows:
                raise BadRequestError("CSV has no rows")

            records = self.normalizer.normalize_rows(parsed.rows)
            inserted = self.repository.bulk_insert(records)
        except AppException as e:
            audit_upload(name, success=False, error=e.message, status_code=e.status_code)
            raise
        except Exception as e:
            logger.exception("IAR upload failed for %s", name)
            audit_upload(name, success=False, error=str(e), status_code=500)
            raise InternalServerError(str(e) or "Upload failed") from e

        audit_upload(name, success=True, inserted=inserted)
        return UploadResult(file_name=name, inserted=inserted)
