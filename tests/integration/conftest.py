"""Integration test configuration and fixtures."""

import uuid
from typing import Generator

import httpx
import pytest

from avrorepo import RepositoryClient, RepositoryConfig


def pytest_configure(config):
    """Register integration test marker."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests requiring a live repository"
    )


def pytest_runtest_setup(item):
    """Skip integration tests if no repository is reachable."""
    if "integration" in [mark.name for mark in item.iter_markers()]:
        if not is_repository_available():
            pytest.skip(f"Schema repository not available at {RepositoryConfig.from_env().base_url}")


def is_repository_available() -> bool:
    """Check if the repository listing answers at AVRO_REPO_URL."""
    try:
        with RepositoryClient(RepositoryConfig.from_env()) as client:
            response = client._client.get("/", timeout=5.0)
        return response.status_code == 200
    except httpx.HTTPError:
        return False


@pytest.fixture
def repository_client() -> Generator[RepositoryClient, None, None]:
    """Client for the live repository."""
    with RepositoryClient(RepositoryConfig.from_env()) as client:
        yield client


@pytest.fixture
def subject_name() -> str:
    """Unique subject name for test isolation."""
    return f"com.example.test.Event{uuid.uuid4().hex[:8]}"
