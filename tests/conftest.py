"""
Test configuration for LeadMiner.
"""

import os

import pytest

from leadminer.config import FetchConfig


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests across modules")


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Keep LEADMINER_* variables from the developer shell out of the tests."""
    for name in list(os.environ):
        if name.startswith("LEADMINER_"):
            monkeypatch.delenv(name)


@pytest.fixture
def no_delay_config() -> FetchConfig:
    """Fetch settings without the politeness pause between contact pages."""
    return FetchConfig(contact_page_delay=0)
