from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from iar_uploader.interfaces.dependencies import get_connectivity_service
from iar_uploader.schemas.responses import DbStatusErrorResponse, DbStatusResponse
from iar_uploader.services.connectivity_service import ConnectivityService

router = APIRouter()


@router.get(
    "/db-status",
    response_model=DbStatusResponse,
    responses={500: {"model": DbStatusErrorResponse}},
)
def db_status(
    connectivity_service: ConnectivityService = Depends(get_connectivity_service),
):
    """Check that the destination database answers a trivial query"""
    result = connectivity_service.check()
    if not result.ok:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=DbStatusErrorResponse(error=result.message).model_dump(),
        )
    return DbStatusResponse(message=result.message)
