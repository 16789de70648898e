from typing import Dict, List

from pydantic import BaseModel, Field


class DbStatusResponse(BaseModel):
    """Schema for a successful connectivity check."""
    ok: bool = True
    message: str


class DbStatusErrorResponse(BaseModel):
    """Schema for a failed connectivity check."""
    ok: bool = False
    error: str


class UploadResponse(BaseModel):
    """Schema for a completed upload."""
    ok: bool = True
    inserted: int = Field(ge=0, description="Number of rows inserted")


class CsvPreviewResponse(BaseModel):
    """Schema for the parsed CSV shown before upload."""
    file_name: str
    headers: List[str]
    rows: List[Dict[str, str]]
    total_rows: int


class ErrorResponse(BaseModel):
    error: str
