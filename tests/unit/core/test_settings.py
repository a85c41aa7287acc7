"""Tests for application settings."""

from hotelaccess.core.config import Settings, get_settings


class TestSettings:

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("HOTEL_ACCESS_POLICY_FILE", raising=False)
        settings = Settings(_env_file=None)
        assert settings.login_path == "/login"
        assert settings.unauthorized_path == "/unauthorized"
        assert settings.landing_path == "/dashboard"
        assert settings.policy_file is None
        assert settings.algorithm == "HS256"

    def test_environment_prefix(self, monkeypatch):
        monkeypatch.setenv("HOTEL_ACCESS_LOGIN_PATH", "/auth/sign-in")
        monkeypatch.setenv("HOTEL_ACCESS_POLICY_FILE", "/etc/hotel-access/policy.yaml")
        settings = Settings(_env_file=None)
        assert settings.login_path == "/auth/sign-in"
        assert settings.policy_file == "/etc/hotel-access/policy.yaml"

    def test_cors_origins_list(self):
        settings = Settings(_env_file=None, cors_origins="http://a.test, http://b.test,")
        assert settings.cors_origins_list == ["http://a.test", "http://b.test"]

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()
