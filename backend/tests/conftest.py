"""
Test configuration and fixtures for ThemeScore tests.
"""
import pytest
from fastapi.testclient import TestClient

from main import create_app
from themescore.config import Config


@pytest.fixture
def config():
    """Configuration built from defaults only."""
    return Config(environ={})


@pytest.fixture
def test_client(config):
    """Create test client for the FastAPI app."""
    return TestClient(create_app(config))
