"""Shared fixtures for API tests."""

import pytest
from fastapi.testclient import TestClient

from live_transport.main import app


@pytest.fixture
def client():
    """FastAPI test client with the lifespan (catalog load) running."""
    with TestClient(app) as c:
        yield c
