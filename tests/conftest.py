"""Pytest configuration and shared fixtures for the unmarkdown-mcp test suite."""

from typing import Generator

import pytest
from utils import FakeUnmarkdownApi

from unmarkdown_mcp.client import UnmarkdownClient

# Configure Hypothesis for property-based testing
try:
    from hypothesis import Verbosity, settings

    settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
    settings.register_profile("dev", max_examples=30)

    import os

    settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))
except ImportError:
    pass


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")


@pytest.fixture
def fake_api() -> FakeUnmarkdownApi:
    """Provide a fresh scripted Unmarkdown API."""
    return FakeUnmarkdownApi()


@pytest.fixture
def api_client(fake_api: FakeUnmarkdownApi) -> Generator[UnmarkdownClient, None, None]:
    """Provide an UnmarkdownClient wired to the fake API.

    Yields
    ------
    UnmarkdownClient
        Client whose requests are answered by ``fake_api``.

    """
    client = fake_api.client()
    try:
        yield client
    finally:
        client.close()
