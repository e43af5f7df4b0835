"""
Shared fixtures for the Er Det Koldt API tests.
"""

import pytest
from unittest.mock import AsyncMock
from fastapi.testclient import TestClient

from core.config import Settings
from features.temperature.models.temperature_types import ForecastResponse
from main import create_app
from edr_payloads import make_payload


@pytest.fixture
def settings():
    """Settings isolated from the environment."""
    return Settings(_env_file=None, dmi_api_key="test-key")


@pytest.fixture
def payload():
    return make_payload()


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app, payload):
    """Test client with the upstream fetch mocked out."""
    with TestClient(app) as test_client:
        app.state.dmi_client.fetch = AsyncMock(
            return_value=ForecastResponse.model_validate(payload)
        )
        yield test_client
