"""
Root pytest configuration and fixtures for the folio client.

Provides common fixtures and test utilities for the test suite.
"""

import os
from pathlib import Path
import sys
from unittest.mock import patch

import pytest

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

BASE = "https://api.test/api/v1"


@pytest.fixture
def base_url():
    """Test base URL."""
    return BASE


@pytest.fixture
def token():
    """Test bearer token."""
    return "tok_old"


@pytest.fixture
def http(base_url, token):
    """Executor with a stored token."""
    from folio._http import HTTPClient

    client = HTTPClient(base_url=base_url, token=token, timeout=5)
    yield client
    client.close()


@pytest.fixture
def client(base_url, token):
    """Authenticated Folio client."""
    from folio import Folio

    folio = Folio(base_url=base_url, token=token, timeout=5)
    yield folio
    folio.close()


@pytest.fixture
def sleeps():
    """Record backoff sleeps instead of sleeping."""
    with patch("folio._http.time.sleep") as mock_sleep:
        yield mock_sleep


@pytest.fixture(autouse=True)
def clean_environment():
    """Clean FOLIO_* environment variables before each test."""
    original_env = os.environ.copy()

    for key in list(os.environ.keys()):
        if key.startswith("FOLIO_"):
            del os.environ[key]

    yield

    os.environ.clear()
    os.environ.update(original_env)
