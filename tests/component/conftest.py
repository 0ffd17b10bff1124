"""
Component Test Layer Configuration

Structure:
    tests/component/
    ├── space_content/   Target client, service and API tests
    └── mocks/           Mock implementations

Every test collected below this directory carries the ``component`` marker.

Usage:
    pytest tests/component -v
    pytest -m component -v
"""
import os
import sys

import pytest

# Set testing environment BEFORE any imports
os.environ["ENV"] = "testing"
os.environ["ENVIRONMENT"] = "testing"

# Add project root
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from tests.component.mocks import MockHttpClient

COMPONENT_DIR = os.path.dirname(os.path.abspath(__file__))

TARGET_TENANT_URL = "https://mc.adobe.io/acme"


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Configure custom markers"""
    config.addinivalue_line(
        "markers", "component: marks tests as component tests (Target mocked)"
    )


def pytest_collection_modifyitems(config, items):
    for item in items:
        if str(item.fspath).startswith(COMPONENT_DIR):
            item.add_marker(pytest.mark.component)


# =============================================================================
# HTTP Mocks
# =============================================================================

@pytest.fixture
def mock_http() -> MockHttpClient:
    """Mock httpx.AsyncClient handed to TargetClient"""
    return MockHttpClient(TARGET_TENANT_URL)
