from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from echome.core.config import Settings
from echome.main import create_app
from echome.services.echo_service import EchoService

FIXED_NOW = datetime(2024, 5, 1, 12, 30, 45, 123456, tzinfo=timezone.utc)
FIXED_TIMESTAMP = "2024-05-01T12:30:45.123Z"


@pytest.fixture
def settings():
    return Settings(LOG_LEVEL="DEBUG", LOG_REQUESTS=True, _env_file=None)


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture
def service(settings, fixed_clock):
    return EchoService(settings, clock=fixed_clock)


@pytest.fixture
def app(settings, service):
    application = create_app(settings)
    application.state.echo_service = service
    return application


@pytest.fixture
def client(app):
    # unhandled errors must come back as 500 responses, not test exceptions
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
