from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from salon.core.config import Settings
from salon.main import app
from salon.wiring.dependencies import build_container, get_container

ADMIN_PASSWORD = "s3cret-pass"


def booking_fields(**overrides):
    fields = {
        "serviceId": 1,
        "appointmentDate": "2026-11-02",
        "appointmentTime": "10:30",
        "customerName": "Jane Doe",
        "customerPhone": "5551234567",
        "customerEmail": "jane@salonmail.com",
        "specialRequests": "",
    }
    fields.update(overrides)
    return fields


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        _env_file=None,
        ENV="test",
        ADMIN_USERNAME="admin",
        ADMIN_PASSWORD=ADMIN_PASSWORD,
        SESSION_SECRET="test-secret",
        SQUARE_APPLICATION_ID="sandbox-sq0idb-test",
        SQUARE_LOCATION_ID="L-TEST",
    )


@pytest.fixture
def container(test_settings):
    return build_container(test_settings)


@pytest.fixture
def client(container):
    app.dependency_overrides[get_container] = lambda: container
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def admin_client(client):
    resp = client.post("/api/login", json={"username": "admin", "password": ADMIN_PASSWORD})
    assert resp.status_code == 200
    return client
