"""Pytest configuration and shared fixtures for neurogame tests.

This module provides:
- Basic pytest configuration
- Fake provider registries (no network access)
- Setup/teardown for test isolation
"""

import os
import sys
from pathlib import Path
from typing import List

import pytest

# Add project root to Python path to allow imports from neurogame and cli
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from tests.fixtures.fake_providers import Call, make_fake_registry  # noqa: E402
from tests.fixtures.sample_data import SAMPLE_HTML  # noqa: E402


# ==================== Pytest Configuration ====================

def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line(
        "markers",
        "unit: mark test as a unit test (fast, isolated)"
    )
    config.addinivalue_line(
        "markers",
        "integration: mark test as an integration test (slower, multiple components)"
    )


# ==================== Environment Fixtures ====================

@pytest.fixture(scope="function", autouse=True)
def isolate_environment():
    """Isolate each test by preventing environment variable pollution."""
    original_env = os.environ.copy()

    yield

    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def mock_env_vars(monkeypatch):
    """Provide mock API keys for testing."""
    env_vars = {
        "OPENAI_API_KEY": "test-openai-key",
        "ANTHROPIC_API_KEY": "test-anthropic-key",
        "HTTP2_ENABLED": "false",
        "LOG_LEVEL": "ERROR",
    }

    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)

    return env_vars


# ==================== Fake Provider Fixtures ====================

@pytest.fixture
def calls() -> List[Call]:
    """Shared call log of every fake provider invocation."""
    return []


@pytest.fixture
def fake_registry(calls):
    """Provider registry with fake OpenAI and Anthropic providers."""
    return make_fake_registry(calls, responses={"action": SAMPLE_HTML})
