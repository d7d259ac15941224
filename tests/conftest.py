"""
Pytest configuration and shared fixtures for the retirement runway tests.
"""

import os
from datetime import datetime, timezone

import pytest

# Settings require a SECRET_KEY; tests that need a different environment patch it
os.environ.setdefault("SECRET_KEY", "test-secret-key")

from app import create_app  # noqa: E402
from app.config import Settings, reset_global_settings  # noqa: E402
from app.models.snapshot import Assets, RoiScenarios, Snapshot  # noqa: E402

FIXED_NOW = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def _reset_settings():
    """Keep the global settings cache from leaking between tests."""
    reset_global_settings()
    yield
    reset_global_settings()


@pytest.fixture
def snapshot():
    """The first-run default snapshot with a fixed timestamp."""
    return Snapshot(last_updated=FIXED_NOW)


@pytest.fixture
def make_snapshot():
    """Build a snapshot from keyword overrides.

    ``investable`` puts the whole liquid balance in savings; ``roi`` sets all
    three return scenarios to the same rate.
    """

    def _make(investable=None, roi=None, **overrides):
        if investable is not None:
            overrides["assets"] = Assets(
                four_oh_one_k=0.0, ira=0.0, savings=investable, other=0.0
            )
        if roi is not None:
            overrides["roi_scenarios"] = RoiScenarios(low=roi, mid=roi, high=roi)
        overrides.setdefault("last_updated", FIXED_NOW)
        return Snapshot(**overrides)

    return _make


@pytest.fixture
def settings(tmp_path):
    """Settings pointing local storage at a temporary directory."""
    return Settings(
        SECRET_KEY="test-secret-key",
        APP_ENV="testing",
        STORAGE_TYPE="local",
        STORAGE_BASE_PATH=str(tmp_path / "storage"),
        _env_file=None,
    )


@pytest.fixture
def app(settings):
    """Flask application backed by temporary local storage."""
    return create_app(settings)


@pytest.fixture
def client(app):
    """Flask test client."""
    return app.test_client()
