from typing import Optional, Tuple

from fastapi import APIRouter, Depends, File, UploadFile

from iar_uploader.interfaces.dependencies import get_upload_service
from iar_uploader.schemas.responses import CsvPreviewResponse, ErrorResponse, UploadResponse
from iar_uploader.services.upload_service import UploadService

router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    413: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def _read_upload(file: Optional[UploadFile]) -> Tuple[Optional[str], Optional[bytes]]:
    # An empty file input arrives without a filename
    if file is None or not file.filename:
        return None, None
    return file.filename, file.file.read()


@router.post("/upload-iar", response_model=UploadResponse, responses=ERROR_RESPONSES)
def upload_iar(
    file: Optional[UploadFile] = File(None, description="IAR monitoring CSV file"),
    upload_service: UploadService = Depends(get_upload_service),
) -> UploadResponse:
    """Parse the CSV and insert all rows into the IAR monitoring table in one batch"""
    file_name, content = _read_upload(file)
    result = upload_service.upload(file_name, content)
    return UploadResponse(inserted=result.inserted)


@router.post("/preview-csv", response_model=CsvPreviewResponse, responses=ERROR_RESPONSES)
def preview_csv(
    file: Optional[UploadFile] = File(None, description="CSV file to preview"),
    upload_service: UploadService = Depends(get_upload_service),
) -> CsvPreviewResponse:
    """Parse the CSV with the upload parser and return it for display"""
    file_name, content = _read_upload(file)
    parsed = upload_service.preview(file_name, content)
    return CsvPreviewResponse(
        file_name=file_name or "",
        headers=parsed.headers,
        rows=parsed.rows,
        total_rows=parsed.total_rows,
    )
