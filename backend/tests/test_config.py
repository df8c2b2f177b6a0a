import pytest
from pydantic import ValidationError

from app.core.config import Settings, get_settings


def test_settings_defaults(monkeypatch):
    monkeypatch.delenv("MIN_CLASS_MINUTES", raising=False)
    monkeypatch.delenv("MAX_CLASS_MINUTES", raising=False)
    settings = Settings(_env_file=None)

    assert settings.api_prefix == "/api"
    assert settings.min_class_minutes == 30
    assert settings.max_class_minutes == 240
    assert settings.log_level == "INFO"


def test_cors_origins_accept_comma_and_json_lists():
    comma = Settings(_env_file=None, cors_origins="http://a.test, http://b.test,")
    as_json = Settings(_env_file=None, cors_origins='["http://a.test", "http://b.test"]')

    assert comma.cors_origins == ["http://a.test", "http://b.test"]
    assert as_json.cors_origins == ["http://a.test", "http://b.test"]


def test_duration_limits_must_be_consistent():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, min_class_minutes=120, max_class_minutes=60)
    with pytest.raises(ValidationError):
        Settings(_env_file=None, min_class_minutes=0)


def test_settings_read_from_environment(monkeypatch):
    monkeypatch.setenv("MIN_CLASS_MINUTES", "45")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = get_settings()

    assert settings.min_class_minutes == 45
    assert settings.log_level == "DEBUG"
    assert get_settings() is settings
