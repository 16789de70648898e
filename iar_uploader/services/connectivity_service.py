from dataclasses import dataclass

from iar_uploader.core.logging import get_logger
from iar_uploader.infrastructure.db.connection import DatabaseManager

logger = get_logger(__name__)


@dataclass(frozen=True)
class ConnectivityResult:
    ok: bool
    message: str


class ConnectivityService:
    """
    Advisory reachability check for the destination database.

    A passing check does not guarantee the next upload succeeds; uploads do not
    re-run it.
    """

    def __init__(self, database_manager: DatabaseManager):
        self.database_manager = database_manager

    def check(self) -> ConnectivityResult:
        ok, message = self.database_manager.health_check()
        if ok:
            logger.info("Database connectivity check passed")
        else:
            logger.warning("Database connectivity check failed: %s", message)
        return ConnectivityResult(ok=ok, message=message)
