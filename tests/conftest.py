"""Pytest fixtures for bitbucket-lifecycle tests."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from unittest.mock import AsyncMock

import pytest
from hypothesis import Phase, Verbosity, settings

from bitbucket_lifecycle.config import BitbucketConfig, LifecycleConfig
from tests.helpers.mocks import API_URL, make_queries

_TEST_BASE_DIR = Path(tempfile.mkdtemp(prefix="bitbucket-lifecycle-tests-"))
os.environ["BITBUCKET_LIFECYCLE_CONFIG_DIR"] = str(_TEST_BASE_DIR / "config")


settings.register_profile(
    "ci",
    max_examples=100,
    deadline=None,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
)
settings.register_profile(
    "dev",
    max_examples=20,
    deadline=500,
)
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    deadline=None,
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


@pytest.fixture()
def config() -> LifecycleConfig:
    """Default configuration with a test Bitbucket endpoint."""
    return LifecycleConfig(
        bitbucket=BitbucketConfig(api_url=API_URL, username="bot", password="s3cret"),
    )


@pytest.fixture()
def compact_config() -> LifecycleConfig:
    """Configuration rendering goals in compact style."""
    return LifecycleConfig.model_validate({"rendering": {"style": "compact"}})


@pytest.fixture()
def queries() -> AsyncMock:
    """Query port reporting a branch without pull requests."""
    return make_queries()


@pytest.fixture()
def messages() -> AsyncMock:
    """Mock MessageClient collecting chat responses."""
    client = AsyncMock()
    client.respond = AsyncMock()
    return client
