"""
Pytest configuration and shared fixtures.
"""

import pytest

from node_monitor.dependencies import reset_singletons
from tests.factories import FakeClock


@pytest.fixture(autouse=True)
def clean_singletons():
    """Automatically reset singletons before each test."""
    reset_singletons()
    yield
    reset_singletons()


@pytest.fixture
def fake_clock():
    return FakeClock()
