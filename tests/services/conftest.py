"""Service test fixtures — isolated registry, settings, and runner factory.

Invariants:
    - Every test gets a fresh ConfigurationRegistry with "svc" registered
    - Settings ignore any .env file so tests see defaults only

Design Decisions:
    - make_runner fixture takes scripted outcomes: each test states its own transport script
"""

import pytest

from apitime.config import Settings
from apitime.infrastructure.configuration_registry import ConfigurationRegistry
from apitime.services.operation_runner import OperationRunner

from tests.services.stub_transport import StubTransport

BASE_URL = "https://api.example.com"


@pytest.fixture
def settings():
    return Settings(_env_file=None)


@pytest.fixture
async def registry():
    registry = ConfigurationRegistry()
    await registry.register("svc", BASE_URL)
    return registry


@pytest.fixture
def make_runner(registry, settings):
    """Build (runner, transport) from a list of scripted transport outcomes."""
    def _make(outcomes=None, **overrides):
        transport = StubTransport(outcomes)
        runner_settings = settings.model_copy(update=overrides) if overrides else settings
        return OperationRunner(registry, transport, runner_settings), transport
    return _make
