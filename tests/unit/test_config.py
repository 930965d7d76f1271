"""Tests for environment-driven settings."""

import pytest
from pydantic import ValidationError

from casework_tasks.config import DEFAULT_PORT, Settings


class TestSettings:
    """Tests for Settings.from_env."""

    def test_defaults(self, temp_db_path):
        settings = Settings.from_env()

        assert settings.database_url == f"sqlite:///{temp_db_path}"
        assert settings.port == DEFAULT_PORT
        assert settings.log_level == "INFO"
        assert settings.cors_origin_list == ["*"]
        assert settings.case_number_start == 1

    def test_prefixed_variables(self, monkeypatch):
        monkeypatch.setenv("CASEWORK_DATABASE_URL", "sqlite://")
        monkeypatch.setenv("CASEWORK_PORT", "9090")
        monkeypatch.setenv("CASEWORK_CASE_NUMBER_START", "500")
        monkeypatch.setenv("CASEWORK_LOG_LEVEL", "warning")

        settings = Settings.from_env()

        assert settings.database_url == "sqlite://"
        assert settings.port == 9090
        assert settings.case_number_start == 500
        assert settings.log_level == "WARNING"

    def test_debug_forces_debug_logging(self, monkeypatch):
        monkeypatch.setenv("CASEWORK_DEBUG", "yes")
        monkeypatch.setenv("CASEWORK_LOG_LEVEL", "ERROR")

        settings = Settings.from_env()

        assert settings.debug is True
        assert settings.log_level == "DEBUG"

    def test_empty_values_fall_back_to_defaults(self, monkeypatch):
        monkeypatch.setenv("CASEWORK_DEBUG", "")
        monkeypatch.setenv("CASEWORK_PORT", "")

        settings = Settings.from_env()

        assert settings.debug is False
        assert settings.port == DEFAULT_PORT

    def test_cors_origins_split_on_commas(self, monkeypatch):
        monkeypatch.setenv("CASEWORK_CORS_ORIGINS", "https://a.example, https://b.example,")

        assert Settings.from_env().cors_origin_list == ["https://a.example", "https://b.example"]

    @pytest.mark.parametrize(
        "name,value",
        [("CASEWORK_PORT", "http"), ("CASEWORK_CASE_NUMBER_START", "-1")],
    )
    def test_invalid_values_rejected(self, monkeypatch, name, value):
        monkeypatch.setenv(name, value)

        with pytest.raises(ValidationError):
            Settings.from_env()
