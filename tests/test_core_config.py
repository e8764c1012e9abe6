"""
Unit Tests for core.config module.

Tests ConsoleSettings loading and validation.
"""

import pytest
from pydantic import ValidationError

from core.config import PAGE_SIZE_OPTIONS, ConsoleSettings, get_settings


class TestConsoleSettings:
    """Tests for ConsoleSettings."""

    def test_defaults(self, monkeypatch):
        for name in ("HR_API_BASE_URL", "HR_DEFAULT_PAGE_SIZE", "HR_USER_ROLE", "HR_EXPORT_FETCH_LIMIT"):
            monkeypatch.delenv(name, raising=False)

        settings = ConsoleSettings(_env_file=None)

        assert settings.api_base_url == "http://localhost:5000"
        assert settings.default_page_size == 20
        assert settings.export_fetch_limit == 999999
        assert settings.user_role == "employee"
        assert settings.letter_currency == "TAKA"

    def test_environment_aliases(self, mock_env_vars):
        settings = ConsoleSettings(_env_file=None)

        assert settings.api_base_url == "https://hr.test.example.com"
        assert settings.api_token.get_secret_value() == "test-api-token"
        assert settings.request_timeout_seconds == 5.0
        assert settings.search_debounce_seconds == 0.25
        assert settings.default_page_size == 50
        assert settings.user_email == "hr@example.com"
        assert settings.user_role == "HR-ADMIN"

    def test_token_is_not_repr(self, mock_env_vars):
        assert "test-api-token" not in repr(ConsoleSettings(_env_file=None))

    @pytest.mark.parametrize("size", PAGE_SIZE_OPTIONS)
    def test_allowed_page_sizes(self, size):
        assert ConsoleSettings(_env_file=None, default_page_size=size).default_page_size == size

    def test_rejects_other_page_size(self):
        with pytest.raises(ValidationError):
            ConsoleSettings(_env_file=None, default_page_size=25)

    def test_rejects_negative_debounce(self):
        with pytest.raises(ValidationError):
            ConsoleSettings(_env_file=None, search_debounce_ms=-1)

    def test_get_settings_is_cached(self):
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()
