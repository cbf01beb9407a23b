"""Testes de DiscordSettings e BaseSettings."""

from __future__ import annotations

import pytest

from config.settings import DiscordSettings, get_discord_settings
from config.settings.base.core import _load_base_from_env
from config.settings.discord import DEFAULT_UNROUTABLE_REPLY, _load_from_env
from utils.errors import ConfigurationError

VALID_KEY = "ab" * 32


class TestDiscordSettings:
    def test_defaults(self) -> None:
        settings = DiscordSettings()
        assert settings.api_endpoint == "https://discord.com/api/v10/"
        assert settings.max_rate_limit_retries is None
        assert settings.unroutable_reply == DEFAULT_UNROUTABLE_REPLY

    def test_validate_ok(self) -> None:
        settings = DiscordSettings(bot_token="t", application_id="1", public_key=VALID_KEY)
        assert settings.validate() == []

    def test_validate_reports_missing_credentials(self) -> None:
        errors = DiscordSettings().validate()
        assert any("DISCORD_BOT_TOKEN" in error for error in errors)
        assert any("DISCORD_PUBLIC_KEY" in error for error in errors)
        assert any("DISCORD_APPLICATION_ID" in error for error in errors)

    def test_validate_rejects_non_hex_key(self) -> None:
        settings = DiscordSettings(bot_token="t", application_id="1", public_key="zz" * 32)
        assert settings.validate() == ["DISCORD_PUBLIC_KEY deve ter 64 caracteres hexadecimais"]

    def test_require_helpers_raise(self) -> None:
        with pytest.raises(ConfigurationError):
            DiscordSettings().require_bot_token()
        with pytest.raises(ConfigurationError):
            DiscordSettings().require_public_key()

    def test_load_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DISCORD_BOT_TOKEN", "tok")
        monkeypatch.setenv("DISCORD_PUBLIC_KEY", VALID_KEY)
        monkeypatch.setenv("DISCORD_API_VERSION", "v9")
        monkeypatch.setenv("DISCORD_MAX_RATE_LIMIT_RETRIES", "3")
        monkeypatch.setenv("DISCORD_REQUEST_TIMEOUT_SECONDS", "5.5")

        settings = _load_from_env()

        assert settings.bot_token == "tok"
        assert settings.api_endpoint.endswith("/v9/")
        assert settings.max_rate_limit_retries == 3
        assert settings.request_timeout_seconds == 5.5

    def test_get_discord_settings_is_cached(self) -> None:
        get_discord_settings.cache_clear()
        assert get_discord_settings() is get_discord_settings()
        get_discord_settings.cache_clear()


class TestBaseSettings:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("prod", "production"), ("stage", "staging"), ("qualquer", "development")],
    )
    def test_environment_parsing(
        self, monkeypatch: pytest.MonkeyPatch, raw: str, expected: str
    ) -> None:
        monkeypatch.setenv("ENVIRONMENT", raw)
        assert _load_base_from_env().environment == expected

    def test_strict_mode(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ENVIRONMENT", "production")
        settings = _load_base_from_env()
        assert settings.is_production
        assert settings.is_strict
