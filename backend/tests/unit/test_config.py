"""Tests for configuration system."""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from admin_console.config import ApiConfig, AppConfig


class TestDefaultConfig:
    """Test that default configuration loads correctly."""

    def test_default_config_loads(self) -> None:
        """AppConfig() with no env vars produces valid defaults."""
        with patch.dict(os.environ, {}, clear=True):
            config = AppConfig(_env_file=None)
        assert config.api.base_url == "http://localhost:5000/api"
        assert config.api.timeout_seconds == 10.0
        assert config.api.token == ""
        assert config.page_size == 10
        assert config.log_level == "INFO"
        assert config.log_format == "console"


class TestEnvOverrides:
    """Environment variables override defaults."""

    def test_nested_api_settings(self) -> None:
        env = {
            "ADMIN_API__BASE_URL": "https://shop.example.com/api/",
            "ADMIN_API__TOKEN": "secret",
            "ADMIN_API__TIMEOUT_SECONDS": "3.5",
        }
        with patch.dict(os.environ, env, clear=True):
            config = AppConfig(_env_file=None)
        assert config.api.base_url == "https://shop.example.com/api"
        assert config.api.token == "secret"
        assert config.api.timeout_seconds == 3.5

    def test_log_level_is_uppercased(self) -> None:
        with patch.dict(os.environ, {"ADMIN_LOG_LEVEL": "debug"}, clear=True):
            config = AppConfig(_env_file=None)
        assert config.log_level == "DEBUG"

    def test_page_size_override(self) -> None:
        with patch.dict(os.environ, {"ADMIN_PAGE_SIZE": "25"}, clear=True):
            config = AppConfig(_env_file=None)
        assert config.page_size == 25


class TestValidation:
    """Invalid values are rejected at load time."""

    def test_invalid_log_level(self) -> None:
        with pytest.raises(ValidationError, match="log_level"):
            AppConfig(_env_file=None, log_level="VERBOSE")

    def test_invalid_log_format(self) -> None:
        with pytest.raises(ValidationError, match="log_format"):
            AppConfig(_env_file=None, log_format="xml")

    @pytest.mark.parametrize("page_size", [0, 101])
    def test_page_size_bounds(self, page_size: int) -> None:
        with pytest.raises(ValidationError):
            AppConfig(_env_file=None, page_size=page_size)

    def test_base_url_must_be_http(self) -> None:
        with pytest.raises(ValidationError, match="http"):
            ApiConfig(base_url="ftp://shop.example.com")

    @pytest.mark.parametrize("timeout", [0, -1, 121])
    def test_timeout_bounds(self, timeout: float) -> None:
        with pytest.raises(ValidationError):
            ApiConfig(timeout_seconds=timeout)
