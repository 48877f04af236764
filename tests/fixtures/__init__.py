"""
Shared Test Fixtures for the Navigation Resolver

This package contains reusable test fixtures organized by category:
- operation_store.py: Sample operations/aliases and store doubles
- navigation.py: Settings, fake clock, recording observer, wired resolver
"""

from .operation_store import (
    customer_wizard,
    customer_list,
    sample_store,
    failing_store,
    mock_store,
)
from .navigation import (
    settings,
    fake_clock,
    recording_observer,
    resolver,
)

__all__ = [
    "customer_wizard",
    "customer_list",
    "sample_store",
    "failing_store",
    "mock_store",
    "settings",
    "fake_clock",
    "recording_observer",
    "resolver",
]
