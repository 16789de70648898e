from fastapi import Depends

from iar_uploader.core.config import Settings, get_settings
from iar_uploader.infrastructure.db.connection import DatabaseManager, get_database_manager
from iar_uploader.infrastructure.db.repositories.iar_repository import IarRepository
from iar_uploader.services.connectivity_service import ConnectivityService
from iar_uploader.services.upload_service import UploadService


def get_connectivity_service(
    db: DatabaseManager = Depends(get_database_manager),
) -> ConnectivityService:
    """Connectivity check dependency"""
    return ConnectivityService(db)


def get_upload_service(
    db: DatabaseManager = Depends(get_database_manager),
    settings: Settings = Depends(get_settings),
) -> UploadService:
    """Upload orchestration dependency"""
    return UploadService(
        IarRepository(db, settings.iar_table_name),
        max_upload_size=settings.upload.max_upload_size,
    )
