"""Shared fixtures and helpers for tests."""

import base64
from pathlib import Path
from typing import Callable, Dict

import pytest
from fastapi.testclient import TestClient

from ellagarden_api.app.core.config import Settings
from ellagarden_api.app.core.file_storage import FileStorage
from ellagarden_api.app.core.store import DataStore
from ellagarden_api.app.main import create_app


def basic_auth(password: str, username: str = "") -> Dict[str, str]:
    token = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
    return {"Authorization": f"Basic {token}"}


def _booking_payload(check_in: str, check_out: str, **overrides: object) -> Dict[str, object]:
    payload: Dict[str, object] = {
        "name": "Anna Svensson",
        "apartmentNumber": "1102",
        "email": "anna@example.se",
        "phone": "070-123 45 67",
        "checkInDate": check_in,
        "checkOutDate": check_out,
        "guestCount": 2,
        "message": None,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def app_settings(tmp_path: Path) -> Settings:
    return Settings(
        environment="test",
        auth_secret="",
        data_dir=str(tmp_path / "data"),
        upload_dir=str(tmp_path / "uploads"),
    )


@pytest.fixture
def memory_store() -> DataStore:
    """Seeded store without any files behind it."""
    return DataStore()


@pytest.fixture
def file_store(app_settings: Settings) -> DataStore:
    return DataStore(app_settings.data_path)


@pytest.fixture
def client(app_settings: Settings, file_store: DataStore) -> TestClient:
    app = create_app(app_settings, store=file_store, files=FileStorage(app_settings.upload_path))
    return TestClient(app)


@pytest.fixture
def admin_headers() -> Dict[str, str]:
    # No AUTH_SECRET configured, so the default password applies.
    return basic_auth("admin")


@pytest.fixture
def make_booking() -> Callable[..., Dict[str, object]]:
    """Return a builder for booking request bodies."""
    return _booking_payload
