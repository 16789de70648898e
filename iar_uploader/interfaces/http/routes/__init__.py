from fastapi import APIRouter

from .database import router as database_router
from .iar import router as iar_router
from .pages import router as pages_router

api_router = APIRouter()

api_router.include_router(database_router, tags=["Database"])
api_router.include_router(iar_router, tags=["IAR Upload"])

__all__ = ["api_router", "pages_router"]
