"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path

import pytest

# Add the project root and src directory to Python path so tests can import properly
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))
sys.path.insert(0, str(project_root / "src"))

from tests.fixtures import FakeProvider  # noqa: E402

from kinderschutz.client import RemoteCompletionClient  # noqa: E402
from kinderschutz.resolver import ResponseResolver  # noqa: E402
from kinderschutz.services.cache import PatternCache  # noqa: E402


@pytest.fixture
def provider():
    """A provider answering with a harmless reply."""
    return FakeProvider(reply="Das klingt nach einem schönen Tag!")


@pytest.fixture
def client(provider):
    client = RemoteCompletionClient(provider, timeout=2.0)
    yield client
    client.close()


@pytest.fixture
def cache():
    return PatternCache()


@pytest.fixture
def resolver(client, cache):
    return ResponseResolver(client=client, cache=cache)
