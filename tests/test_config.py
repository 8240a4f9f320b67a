"""
Tests for AppSettings (pydantic-settings) and the user .env helpers.
"""

import os

import pytest
from pydantic import ValidationError

from core.config import AppSettings, write_user_env_vars
from core.domain.models import HealthCriteria


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in list(os.environ):
        if key.startswith("LN_QUERY_"):
            monkeypatch.delenv(key, raising=False)


class TestAppSettings:

    def test_defaults(self):
        settings = AppSettings(_env_file=None)
        assert settings.connection_type == "lnd-rest"
        assert settings.lnd_rest_url == "https://localhost:8080"
        assert settings.http_timeout_seconds is None
        assert settings.health_criteria() == HealthCriteria(min_local_ratio=0.1, max_local_ratio=0.9)

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("LN_QUERY_CONNECTION_TYPE", "mock")
        monkeypatch.setenv("LN_QUERY_LND_REST_PORT", "10080")
        monkeypatch.setenv("LN_QUERY_MIN_LOCAL_RATIO", "0.2")
        settings = AppSettings(_env_file=None)
        assert settings.connection_type == "mock"
        assert settings.lnd_rest_port == 10080
        assert settings.health_criteria().min_local_ratio == 0.2

    def test_env_file(self, tmp_path):
        env = tmp_path / ".env"
        env.write_text("LN_QUERY_LND_HOST=node.local\nLN_QUERY_MAX_LOCAL_RATIO=0.8\n", encoding="utf-8")
        settings = AppSettings(_env_file=str(env))
        assert settings.lnd_host == "node.local"
        assert settings.max_local_ratio == 0.8

    @pytest.mark.parametrize("kwargs", [
        {"min_local_ratio": 0.9, "max_local_ratio": 0.1},
        {"min_local_ratio": 1.5},
        {"lnd_rest_port": 0},
        {"lnd_rest_port": 70000},
        {"connection_type": "grpc"},
        {"http_timeout_seconds": 0},
    ])
    def test_invalid_values(self, kwargs):
        with pytest.raises(ValidationError):
            AppSettings(_env_file=None, **kwargs)


class TestUserEnv:

    def test_write_and_merge(self, tmp_path):
        env_path = tmp_path / "cfg" / ".env"
        write_user_env_vars({"LN_QUERY_LND_HOST": "a"}, env_path)
        write_user_env_vars({"LN_QUERY_LND_REST_PORT": "8081", "LN_QUERY_LND_HOST": "b"}, env_path)

        lines = env_path.read_text(encoding="utf-8").splitlines()
        assert lines[0].startswith("#")
        assert "LN_QUERY_LND_HOST=b" in lines
        assert "LN_QUERY_LND_REST_PORT=8081" in lines
        assert len([line for line in lines if line.startswith("LN_QUERY_LND_HOST")]) == 1
