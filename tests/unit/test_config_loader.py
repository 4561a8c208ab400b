"""
Unit tests for settings and the environment config loader
"""
from trip_planner.config.loader import ConfigLoader
from trip_planner.config.settings import Environment, LogLevel, SecuritySettings, Settings


def test_allowed_origins_are_split_and_trimmed():
    security = SecuritySettings(allowed_origin=" https://a.example , https://b.example,,")
    assert security.allowed_origins == ["https://a.example", "https://b.example"]
    assert SecuritySettings(allowed_origin="").allowed_origins == []


def test_settings_normalize_enums():
    settings = Settings(environment="PRODUCTION", log_level="debug")
    assert settings.environment is Environment.PRODUCTION
    assert settings.log_level is LogLevel.DEBUG
    assert settings.is_production()


def test_missing_environment_file_falls_back_to_defaults(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    settings = ConfigLoader.load_environment_config("staging")
    assert settings.environment is Environment.STAGING
    assert settings.app_name == "travel-api"


def test_environment_file_feeds_nested_groups(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    for name in ("SECURITY_APP_PASSWORD", "DATABASE_URL", "FLIGHT_LOOKUP_ACCESS_KEY", "ENVIRONMENT", "PORT"):
        monkeypatch.delenv(name, raising=False)
    (tmp_path / ".env.testing").write_text(
        "ENVIRONMENT=testing\n"
        "PORT=9000\n"
        "DATABASE_URL=sqlite+aiosqlite:///./other.db\n"
        "SECURITY_APP_PASSWORD=hunter2\n"
        "FLIGHT_LOOKUP_ACCESS_KEY=abc\n"
    )
    settings = ConfigLoader.load_environment_config("testing")
    assert settings.port == 9000
    assert settings.database.url == "sqlite+aiosqlite:///./other.db"
    assert settings.security.app_password == "hunter2"
    assert settings.flight_lookup.access_key == "abc"


def test_sample_files_are_not_listed_as_environments(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    sample = ConfigLoader.create_sample_env_file("production")
    assert sample == ".env.production.sample"
    assert "SECURITY_APP_PASSWORD=change-me" in (tmp_path / sample).read_text()
    (tmp_path / ".env.development").write_text("ENVIRONMENT=development\n")
    assert ConfigLoader.get_available_environments() == ["development"]


def test_production_requires_app_password(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("SECURITY_APP_PASSWORD", raising=False)
    (tmp_path / ".env.production").write_text("ENVIRONMENT=production\n")
    assert not ConfigLoader.validate_environment_config("production")
    (tmp_path / ".env.production").write_text("ENVIRONMENT=production\nSECURITY_APP_PASSWORD=s3cret\n")
    assert ConfigLoader.validate_environment_config("production")
    assert not ConfigLoader.validate_environment_config("staging")
