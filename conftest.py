"""Root pytest configuration."""

import os

import pytest

# Settings read by xpertia.config; tests start from an empty environment
_XPERTIA_ENV_VARS = (
    "XPERTIA_API_URL",
    "XPERTIA_API_TOKEN",
    "XPERTIA_STUDENT_ID",
    "XPERTIA_COHORT_ID",
    "AUTOSAVE_INTERVAL_S",
    "API_TIMEOUT_S",
    "DEV_MODE",
    "SENTRY_DSN",
    "SENTRY_ENVIRONMENT",
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    """Keep a developer's .env from leaking into config-dependent tests."""
    for name in _XPERTIA_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield os.environ


@pytest.fixture(scope="session")
def event_loop_policy():
    """Use default event loop policy for all async tests."""
    import asyncio

    return asyncio.DefaultEventLoopPolicy()
