"""
Shared fixtures.

Every test gets its own store and app instance so state never leaks
between tests; the seeded fixture catalogue is the same one the service
starts with.
"""

import pytest
from fastapi.testclient import TestClient

from rizyland.config import Settings
from rizyland.main import create_app
from rizyland.seed import seed_storage
from rizyland.storage import MemStorage


@pytest.fixture
def empty_storage() -> MemStorage:
    """Store without any records."""
    return MemStorage()


@pytest.fixture
def storage() -> MemStorage:
    """Store seeded with the fixture catalogue."""
    return seed_storage(MemStorage())


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings pointing upload directories at a temporary location."""
    return Settings(
        SEED_DATA=False,
        PUBLIC_DIR=str(tmp_path / "public"),
        UPLOAD_TEMP_DIR=str(tmp_path / "temp_uploads"),
        LOG_LEVEL="DEBUG",
    )


@pytest.fixture
def app(settings, storage):
    return create_app(settings=settings, storage=storage)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client
