"""Root conftest: shared fixtures for all worktime tests.

Provides:
- Autouse reset of the GitHub TTL caches
- Autouse reset of the shared GitHub HTTP client
- Default analysis configuration for a March 2022 range
"""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from worktime.config.analysis import AnalysisConfig
from worktime.services.github.cache import clear_all_caches


@pytest.fixture(autouse=True)
def _clear_github_caches():
    """Clear GitHub TTL caches before each test to prevent cross-test pollution."""
    clear_all_caches()
    yield
    clear_all_caches()


@pytest.fixture(autouse=True)
def _reset_github_client():
    """Forget the shared HTTP client so no test reuses another test's client."""
    import worktime.services.github.http_client as mod

    original = mod._client
    mod._client = None
    yield
    mod._client = original


@pytest.fixture
def march_config() -> AnalysisConfig:
    """Analysis of March 2022 with the default threshold and padding."""
    return AnalysisConfig(
        start=datetime(2022, 3, 1, tzinfo=UTC),
        end=datetime(2022, 4, 1, tzinfo=UTC),
    )
