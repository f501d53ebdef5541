"""Tests for environment-driven configuration."""

import os
from unittest.mock import patch

import pytest

from xpertia.config import (
    ConfigError,
    check_required_env_vars,
    get_api_url,
    get_autosave_interval,
    init_sentry,
    normalize_api_url,
    session_from_env,
)

_SESSION_VARS = {
    "XPERTIA_API_URL": "http://localhost:3000",
    "XPERTIA_API_TOKEN": "tok",
    "XPERTIA_STUDENT_ID": "estudiante:1",
    "XPERTIA_COHORT_ID": "cohorte:1",
}


class TestApiUrl:
    @pytest.mark.parametrize(
        "url,expected",
        [
            ("http://localhost:3000", "http://localhost:3000/api/v1"),
            ("http://localhost:3000/", "http://localhost:3000/api/v1"),
            ("https://api.xpertia.io/api/v1", "https://api.xpertia.io/api/v1"),
            ("https://api.xpertia.io/api/v1/", "https://api.xpertia.io/api/v1"),
        ],
    )
    def test_normalize(self, url, expected):
        assert normalize_api_url(url) == expected

    def test_default_when_unset(self):
        with patch.dict(os.environ, {}, clear=True):
            assert get_api_url() == "http://localhost:3000/api/v1"


class TestAutosaveInterval:
    def test_default_is_ten_seconds(self):
        with patch.dict(os.environ, {}, clear=True):
            assert get_autosave_interval() == 10.0

    def test_override(self):
        with patch.dict(os.environ, {"AUTOSAVE_INTERVAL_S": "2.5"}):
            assert get_autosave_interval() == 2.5

    @pytest.mark.parametrize("raw", ["soon", "0", "-1"])
    def test_invalid_values_raise(self, raw):
        with patch.dict(os.environ, {"AUTOSAVE_INTERVAL_S": raw}):
            with pytest.raises(ConfigError):
                get_autosave_interval()


def test_session_from_env():
    with patch.dict(os.environ, _SESSION_VARS, clear=True):
        session = session_from_env()
    assert session.student_id == "estudiante:1"
    assert session.is_authenticated
    assert session.authorization_header() == {"Authorization": "Bearer tok"}


def test_session_from_empty_env():
    with patch.dict(os.environ, {}, clear=True):
        session = session_from_env()
    assert not session.is_authenticated
    assert session.authorization_header() == {}


class TestRequiredEnvVars:
    def test_all_set(self):
        with patch.dict(os.environ, {**_SESSION_VARS, "SENTRY_DSN": "x"}, clear=True):
            ok, warnings = check_required_env_vars()
        assert ok is True
        assert warnings == []

    def test_missing_required(self):
        with patch.dict(os.environ, {}, clear=True):
            ok, warnings = check_required_env_vars()
        assert ok is False

    def test_optional_missing_only_warns_outside_dev(self):
        with patch.dict(os.environ, _SESSION_VARS, clear=True):
            ok, warnings = check_required_env_vars()
        assert ok is True
        assert any("SENTRY_DSN" in w for w in warnings)

        with patch.dict(os.environ, {**_SESSION_VARS, "DEV_MODE": "true"}, clear=True):
            ok, warnings = check_required_env_vars()
        assert ok is True
        assert warnings == []


class TestSentry:
    def test_not_initialized_without_dsn(self):
        with patch.dict(os.environ, {}, clear=True):
            with patch("xpertia.config.sentry_sdk") as mock_sentry:
                assert init_sentry() is False
        mock_sentry.init.assert_not_called()

    def test_initialized_with_dsn(self):
        env = {"SENTRY_DSN": "https://key@sentry.example/1", "DEV_MODE": "1"}
        with patch.dict(os.environ, env, clear=True):
            with patch("xpertia.config.sentry_sdk") as mock_sentry:
                assert init_sentry() is True
        mock_sentry.init.assert_called_once_with(
            dsn="https://key@sentry.example/1", environment="development"
        )
