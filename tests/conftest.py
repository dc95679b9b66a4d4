"""Pytest configuration and shared fixtures for the md-renderer test suite."""

import os

import pytest
from hypothesis import settings

from md_renderer.config import RendererConfig
from md_renderer.core import MarkdownRenderer
from md_renderer.protocol import RequestProcessor

settings.register_profile("ci", max_examples=200)
settings.register_profile("dev", max_examples=50)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - protocol and component interaction")
    config.addinivalue_line("markers", "cli: Tests related to the command-line interface")


@pytest.fixture
def renderer():
    return MarkdownRenderer()


@pytest.fixture
def processor():
    """Processor with caching disabled so every call exercises the engine."""
    return RequestProcessor(config=RendererConfig(cache_enabled=False))


@pytest.fixture
def cached_processor():
    return RequestProcessor(config=RendererConfig(cache_enabled=True, cache_ttl=60.0))
