"""Tests for settings loading."""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from kyivstar_adwisor.config import Settings, get_settings


class TestSettings:
    """Tests for Settings."""

    def test_load_from_environment(self):
        env = {
            "KYIVSTAR_CLIENT_ID": "env-id",
            "KYIVSTAR_CLIENT_SECRET": "env-secret",
            "KYIVSTAR_USE_SANDBOX": "true",
            "KYIVSTAR_TIMEOUT": "12.5",
        }
        with patch.dict(os.environ, env, clear=True):
            settings = Settings(_env_file=None)

        assert settings.client_id == "env-id"
        assert settings.client_secret == "env-secret"
        assert settings.use_sandbox is True
        assert settings.timeout == 12.5

    def test_defaults(self):
        env = {"KYIVSTAR_CLIENT_ID": "id", "KYIVSTAR_CLIENT_SECRET": "secret"}
        with patch.dict(os.environ, env, clear=True):
            settings = Settings(_env_file=None)

        assert settings.use_sandbox is False
        assert settings.timeout == 30.0

    def test_missing_credentials(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValidationError):
                Settings(_env_file=None)

    def test_get_settings(self, tmp_path, monkeypatch):
        """Test that get_settings reads a .env file in the working directory."""
        (tmp_path / ".env").write_text(
            "KYIVSTAR_CLIENT_ID=file-id\nKYIVSTAR_CLIENT_SECRET=file-secret\n",
            encoding="utf-8",
        )
        monkeypatch.chdir(tmp_path)

        with patch.dict(os.environ, {}, clear=True):
            settings = get_settings()

        assert settings.client_id == "file-id"
        assert settings.use_sandbox is False
