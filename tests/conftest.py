"""Shared pytest fixtures for LinkedEvents client tests.

Fixture Organization:
    - Client fixtures: LinkedEventsClient bound to a fake base URL
    - Logging fixtures: Re-enable propagation so caplog sees records
    - Config fixtures: Reset the settings singleton between tests
"""

import logging
import sys
from collections.abc import Generator
from pathlib import Path

import pytest

from linked_events import LinkedEventsClient, reset_config

# Add tests directory to sys.path so test modules can import http_test_helpers
tests_dir = Path(__file__).parent
if str(tests_dir) not in sys.path:
    sys.path.insert(0, str(tests_dir))

from http_test_helpers import BASE_URL  # noqa: E402


@pytest.fixture
def client() -> Generator[LinkedEventsClient, None, None]:
    """Create LinkedEventsClient instance for testing."""
    instance = LinkedEventsClient(BASE_URL)
    yield instance
    instance.close()


@pytest.fixture
def propagate_logs() -> Generator[None, None, None]:
    """Let linked_events records reach the root logger for caplog."""
    package_logger = logging.getLogger("linked_events")
    original = package_logger.propagate
    package_logger.propagate = True
    yield
    package_logger.propagate = original


@pytest.fixture(autouse=True)
def clean_config() -> Generator[None, None, None]:
    """Reset the config singleton around every test."""
    reset_config()
    yield
    reset_config()
