"""
Upload a CSV file into the IAR monitoring table
"""

from pathlib import Path

from iar_uploader.core.exceptions import AppException
from iar_uploader.infrastructure.db.connection import DatabaseManager
from iar_uploader.infrastructure.db.repositories.iar_repository import IarRepository
from iar_uploader.interfaces.cli.commands.base import BaseCommand
from iar_uploader.services.upload_service import UploadService


class Command(BaseCommand):
    description = "Insert every row of a CSV file as one batch"

    def add_arguments(self, parser):
        parser.add_argument("file", help="Path to the CSV file")

    def handle(self, **kwargs) -> int:
        path = Path(kwargs["file"])
        try:
            content = path.read_bytes()
        except OSError as e:
            self.print_error(f"Cannot read {path}: {e}")
            return 1

        settings = self.settings
        database_manager = DatabaseManager(settings)
        service = UploadService(
            IarRepository(database_manager, settings.iar_table_name),
            max_upload_size=settings.upload.max_upload_size,
        )
        try:
            result = service.upload(path.name, content)
        except AppException as e:
            self.print_error(f"Upload failed: {e.message}")
            return 1
        finally:
            database_manager.dispose()

        self.print_success(f"Upload complete. Inserted {result.inserted} rows.")
        return 0
