"""Shared fixtures for the gateway log service tests."""

import pytest
from fastapi.testclient import TestClient

from main import create_app
from services.log_service import LogService
from services.storage import LogStore, MemoryLogStore


@pytest.fixture
def log_file(tmp_path):
    return tmp_path / "data" / "logs.json"


@pytest.fixture
def file_store(log_file):
    return LogStore(str(log_file))


@pytest.fixture
def memory_store():
    return MemoryLogStore()


@pytest.fixture
def service(memory_store):
    return LogService(memory_store)


@pytest.fixture
def gateway_payload():
    return {
        "request": {
            "url": "/api/orders",
            "method": "POST",
            "headers": {"content-type": "application/json", "x-forwarded-for": ["10.0.0.1", "10.0.0.2"]},
            "body": '{"sku": "A-1"}',
        },
        "response": {
            "status_code": 201,
            "headers": {"content-type": "application/json"},
            "body": '{"id": 7}',
        },
    }


@pytest.fixture
def app(file_store):
    """Application backed by a temp file store."""
    return create_app(store=file_store, service_name="test-service")


@pytest.fixture
def client(app):
    return TestClient(app)
