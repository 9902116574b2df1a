"""Fixtures for end-to-end tests against the HTTP app with mock adapters."""

import pytest
from fastapi.testclient import TestClient

from tokiwa.interface.api.app import create_app
from tests.di import build_test_container


@pytest.fixture
def client():
    """Test client over a fresh app and container per test."""
    app = create_app(build_test_container(fastapi=True))
    return TestClient(app)
