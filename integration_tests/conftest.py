"""Pytest configuration for integration tests."""

import pytest


# Everything under integration_tests/ runs real timers and databases
def pytest_collection_modifyitems(items):
    """Mark tests collected from this directory as integration tests."""
    for item in items:
        if "integration_tests" in str(item.path):
            item.add_marker(pytest.mark.integration)
