"""Shared test fixtures."""

import logging

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import select

from iar_uploader.core.config import Settings, get_settings
from iar_uploader.infrastructure.db.connection import DatabaseManager, get_database_manager
from iar_uploader.infrastructure.db.tables import get_iar_table
from iar_uploader.main import create_application

UNREACHABLE_DATABASE_URL = "sqlite:////nonexistent/iar-uploader/iar.db"


@pytest.fixture(autouse=True)
def _reset_logging_handlers():
    """Drop handlers installed by setup_logging so they never outlive a captured stream."""
    yield
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        if getattr(handler, "_iar_uploader", False):
            root_logger.removeHandler(handler)
            handler.close()


@pytest.fixture
def settings(tmp_path, monkeypatch):
    """Settings pointing at a fresh SQLite file, also returned by get_settings()."""
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'iar.db'}")
    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()


@pytest.fixture
def db_manager(settings):
    """DatabaseManager with the IAR table created."""
    manager = DatabaseManager(settings)
    get_iar_table(settings.iar_table_name).create(manager.get_engine())
    yield manager
    manager.dispose()


@pytest.fixture
def unreachable_db_manager():
    manager = DatabaseManager(Settings(database_url=UNREACHABLE_DATABASE_URL))
    yield manager
    manager.dispose()


def _client_for(settings, manager):
    app = create_application(settings)
    app.dependency_overrides[get_database_manager] = lambda: manager
    return TestClient(app)


@pytest.fixture
def client(settings, db_manager):
    with _client_for(settings, db_manager) as test_client:
        yield test_client


@pytest.fixture
def unreachable_client(settings, unreachable_db_manager):
    with _client_for(settings, unreachable_db_manager) as test_client:
        yield test_client


@pytest.fixture
def fetch_rows(db_manager, settings):
    """Read back every row of the IAR table as dicts."""
    table = get_iar_table(settings.iar_table_name)

    def _fetch():
        with db_manager.get_engine().connect() as connection:
            return [dict(row) for row in connection.execute(select(table)).mappings()]

    return _fetch
