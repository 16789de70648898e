"""
Check that the destination database is reachable
"""

from iar_uploader.infrastructure.db.connection import DatabaseManager
from iar_uploader.interfaces.cli.commands.base import BaseCommand
from iar_uploader.services.connectivity_service import ConnectivityService


class Command(BaseCommand):
    description = "Run the database connectivity check"

    def handle(self, **kwargs) -> int:
        database_manager = DatabaseManager(self.settings)
        try:
            result = ConnectivityService(database_manager).check()
        finally:
            database_manager.dispose()

        if result.ok:
            self.print_success(result.message)
            return 0
        self.print_error(result.message)
        return 1
