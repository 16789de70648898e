from typing import Any, Dict, Optional

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_413_CONTENT_TOO_LARGE,
    HTTP_500_INTERNAL_SERVER_ERROR,
)


class AppException(Exception):
    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        status_code: int = HTTP_400_BAD_REQUEST,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class BadRequestError(AppException):
    """Exception raised for bad requests."""

    def __init__(
        self,
        message: str = "Bad request",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            error_code="BAD_REQUEST",
            details=details,
            status_code=HTTP_400_BAD_REQUEST,
        )


class PayloadTooLargeError(AppException):
    """Exception raised when an uploaded file exceeds the configured limit."""

    def __init__(self, size: int, limit: int):
        super().__init__(
            message=f"File too large ({size} bytes). Maximum size allowed is {limit} bytes.",
            error_code="PAYLOAD_TOO_LARGE",
            details={"size": size, "limit": limit},
            status_code=HTTP_413_CONTENT_TOO_LARGE,
        )


class InternalServerError(AppException):
    """Exception raised for internal server errors."""

    def __init__(
        self,
        message: str = "Internal server error",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            error_code="INTERNAL_SERVER_ERROR",
            details=details,
            status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        )


class FileProcessingException(AppException):
    """Exception raised when an uploaded file cannot be read or decoded."""

    def __init__(
        self,
        message: str = "File processing failed",
        file_name: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.file_name = file_name

        exception_details = details or {}
        if file_name:
            exception_details["file_name"] = file_name

        super().__init__(
            message=message,
            error_code="FILE_PROCESSING_ERROR",
            details=exception_details,
            status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        )


class DatabaseError(AppException):
    """Exception raised for database-related errors."""

    def __init__(
        self,
        message: str = "Database error occurred",
        operation: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.operation = operation

        exception_details = details or {}
        if operation:
            exception_details["operation"] = operation

        super().__init__(
            message=message,
            error_code="DATABASE_ERROR",
            details=exception_details,
            status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        )


class RecordWriteError(AppException):
    """Exception raised when a normalized record cannot be converted for the destination table."""

    def __init__(
        self,
        message: str,
        row_number: Optional[int] = None,
        field: Optional[str] = None,
        value: Optional[Any] = None,
    ):
        self.row_number = row_number
        self.field = field
        self.value = value

        details: Dict[str, Any] = {}
        if row_number is not None:
            details["row_number"] = row_number
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = value

        super().__init__(
            message=message,
            error_code="RECORD_WRITE_ERROR",
            details=details,
            status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        )


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message},
    )
