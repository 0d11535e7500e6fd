"""Tests for environment driven settings."""

from fitpulse.config import Settings, get_settings, reset_settings_cache


def test_defaults_match_marketplace_cookies():
    settings = Settings(secret_key="k")

    assert settings.user_access_cookie == "userAccessToken"
    assert settings.trainer_access_cookie == "trainerAccessToken"
    assert settings.redis_url is None
    assert settings.jwt_algorithm == "HS256"


def test_blank_redis_url_disables_shared_bus():
    assert Settings(secret_key="k", redis_url="   ").redis_url is None


def test_log_level_is_normalised():
    assert Settings(secret_key="k", log_level=" debug ").log_level == "DEBUG"


def test_settings_are_reloaded_after_cache_reset(monkeypatch):
    monkeypatch.setenv("REDIS_URL", "redis://cache:6379/1")
    reset_settings_cache()
    try:
        assert get_settings().redis_url == "redis://cache:6379/1"
    finally:
        monkeypatch.delenv("REDIS_URL")
        reset_settings_cache()
