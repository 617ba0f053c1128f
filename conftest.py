"""
Shared pytest fixtures.
"""

import pytest

from creator_shared.config import ServiceConfig
from creator_shared.logging import clear_context, configure_logging


@pytest.fixture(autouse=True, scope="session")
def structured_logging():
    """Configure structlog once, before any logger is first used."""
    configure_logging("test", "info")


@pytest.fixture(autouse=True)
def reset_log_context():
    """Keep correlation ids from leaking between tests."""
    clear_context()
    yield
    clear_context()


@pytest.fixture
def service_config():
    """Web service configuration with a well-formed cache url and token."""
    return ServiceConfig(
        service_name="web",
        port=8000,
        env="test",
        cache_url="redis://localhost:6379/0",
        cache_token="test-token",
    )
