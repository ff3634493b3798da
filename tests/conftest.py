"""
Pytest configuration and fixtures for the test suite.

Defines markers for selective test execution:
    pytest -m unit          # Fast unit tests
    pytest -m integration   # Pipeline and CLI tests touching the filesystem

Fixtures are centralized in tests/fixtures/ for reuse across all test modules.
"""

import logging
import os
import sys
import pytest

# Add src to path for imports
src_dir = os.path.join(os.path.dirname(__file__), '..', 'src')
if src_dir not in sys.path:
    sys.path.insert(0, src_dir)

# Add tests directory to path for fixtures import
tests_dir = os.path.dirname(__file__)
if tests_dir not in sys.path:
    # Ensure src directory stays ahead of tests for module resolution
    sys.path.insert(1, tests_dir)

from fixtures import (
    EXAMPLE_VOCAB_TTL,
    NO_METADATA_TTL,
    SAMPLE_GENERATOR_CONFIG,
)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Fast unit tests")
    config.addinivalue_line("markers", "integration: Pipeline and CLI tests touching the filesystem")


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers installed by setup_logging so captured streams are not reused."""
    root_level = logging.getLogger().level
    yield
    from vocabgen.app.cli import helpers
    logging.getLogger().setLevel(root_level)
    helpers._clear_managed_handlers()


# =============================================================================
# Vocabulary Fixtures
# =============================================================================

@pytest.fixture
def example_vocab_ttl():
    """Turtle vocabulary with vann metadata, deprecated terms and a has_ rename."""
    return EXAMPLE_VOCAB_TTL


@pytest.fixture
def example_vocab_file(tmp_path):
    """EXAMPLE_VOCAB_TTL written to a local .ttl file."""
    path = tmp_path / "example.ttl"
    path.write_text(EXAMPLE_VOCAB_TTL, encoding="utf-8")
    return path


@pytest.fixture
def no_metadata_file(tmp_path):
    """Vocabulary without vann metadata written to a local .ttl file."""
    path = tmp_path / "plain.ttl"
    path.write_text(NO_METADATA_TTL, encoding="utf-8")
    return path


# =============================================================================
# Configuration Fixtures
# =============================================================================

@pytest.fixture
def sample_config_dict():
    """Full generator configuration dictionary."""
    return SAMPLE_GENERATOR_CONFIG


@pytest.fixture
def cache_dir(tmp_path):
    """Empty cache root directory."""
    path = tmp_path / "cache"
    path.mkdir()
    return path


@pytest.fixture
def output_dir(tmp_path):
    """Root directory for generated sources."""
    return tmp_path / "generated"
