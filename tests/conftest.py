"""
Test configuration and fixtures for the image search tool.

This module provides pytest fixtures and configuration for testing.
"""

import sys
from pathlib import Path
from typing import Dict, Generator, List, Optional

import pytest

# Add the project root to the Python path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.config.config import Config, LoggingConfig, RegistriesConfig, SearchDefaults
from src.registry.client import RegistryClient
from src.registry.types import RawResult, SystemContext
from src.utils.errors import RegistryQueryError


class FakeRegistryClient(RegistryClient):
    """Registry client serving canned results per host."""

    def __init__(self, results: Dict[str, List[RawResult]], failing: Optional[List[str]] = None):
        self.results = results
        self.failing = set(failing or [])
        self.calls = []

    async def search(
        self,
        host: str,
        term: str,
        limit: int,
        context: Optional[SystemContext] = None,
    ) -> List[RawResult]:
        self.calls.append((host, term, limit, context))
        if host in self.failing:
            raise RegistryQueryError(f"connection refused by {host}", registry=host)
        return self.results.get(host, [])


def make_results(count: int, prefix: str = "image", **kwargs) -> List[RawResult]:
    """Build `count` raw results named prefix0, prefix1, ..."""
    return [RawResult(name=f"{prefix}{i}", **kwargs) for i in range(count)]


@pytest.fixture
def test_config() -> Config:
    """Provide a test configuration."""
    return Config(
        registries=RegistriesConfig(
            search=["docker.io", "quay.io"],
            timeout=5,
        ),
        search=SearchDefaults(
            limit=0,
            no_trunc=False,
            tls_verify=None,
        ),
        logging=LoggingConfig(
            level="DEBUG",
            config_file=None,
            log_file=None,
        ),
        debug=True,
    )


@pytest.fixture
def sample_results() -> List[RawResult]:
    """Provide a mix of official, automated and plain results."""
    return [
        RawResult(
            name="alpine",
            description="A minimal Docker image based on Alpine Linux",
            star_count=9000,
            is_official=True,
        ),
        RawResult(
            name="mhart/alpine-node",
            description="Minimal Node.js built on Alpine Linux",
            star_count=480,
            is_automated=True,
        ),
        RawResult(
            name="someone/alpine-tools",
            description="Tools\non alpine",
            star_count=3,
        ),
    ]


@pytest.fixture
def test_env_vars(monkeypatch: pytest.MonkeyPatch) -> Generator[Dict[str, str], None, None]:
    """Set up test environment variables."""
    env_vars = {
        "IMAGE_SEARCH_REGISTRIES": "registry.fedoraproject.org, quay.io",
        "IMAGE_SEARCH_TIMEOUT": "12.5",
        "IMAGE_SEARCH_LOGGING_LEVEL": "DEBUG",
        "IMAGE_SEARCH_DEBUG": "true",
    }

    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)

    yield env_vars


@pytest.fixture
def fake_client_cls():
    """Provide the fake registry client class."""
    return FakeRegistryClient


@pytest.fixture
def results_factory():
    """Provide the raw result builder."""
    return make_results
