"""
Pytest Configuration for the Navigation Resolver
================================================

Root conftest.py - shared fixtures live in tests/fixtures/.
"""

import pytest

from tests.fixtures import *  # noqa: F401,F403


def pytest_collection_modifyitems(config, items):
    """Automatically add markers based on test location."""
    for item in items:
        if "/unit/" in item.nodeid:
            item.add_marker(pytest.mark.unit)
            item.add_marker(pytest.mark.fast)  # Unit tests are fast by default
        elif "/integration/" in item.nodeid:
            item.add_marker(pytest.mark.integration)
            item.add_marker(pytest.mark.slow)

        # Add feature area markers
        if "resolver" in item.nodeid or "cache" in item.nodeid:
            item.add_marker(pytest.mark.resolver)
        if "loader" in item.nodeid:
            item.add_marker(pytest.mark.loader)
        if "config" in item.nodeid.lower():
            item.add_marker(pytest.mark.config)
