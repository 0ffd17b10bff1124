"""
Unit Test Layer Configuration

Structure:
    tests/unit/
    └── space_content/   Scheduling, selection, merge and ordering logic

Every test collected below this directory carries the ``unit`` marker.

Usage:
    pytest tests/unit -v
    pytest -m unit -v
"""
import os
import sys

import pytest

# Add project root
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

UNIT_DIR = os.path.dirname(os.path.abspath(__file__))


def pytest_configure(config):
    """Configure custom markers"""
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests (no I/O)"
    )


def pytest_collection_modifyitems(config, items):
    for item in items:
        if str(item.fspath).startswith(UNIT_DIR):
            item.add_marker(pytest.mark.unit)
