"""
Root conftest.py - Global fixtures and configuration for all test layers.

Test Layers:
    - component/: Service and API tests (Target gateway mocked)
    - unit/     : Pure logic tests (no I/O)
    - contracts/: Target payload factories shared by all layers
"""
import os
import sys

import pytest

# Set testing environment BEFORE any service imports
os.environ.setdefault("ENV", "testing")
os.environ.setdefault("LOG_LEVEL", "WARNING")

# Add project root to path
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJECT_ROOT)

from tests.contracts.space_content.data_contract import SpaceContentTestDataFactory


@pytest.fixture
def factory() -> SpaceContentTestDataFactory:
    """Target payload factory"""
    return SpaceContentTestDataFactory()
