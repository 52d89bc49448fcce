"""Settings 读取与校验测试."""

import pytest
from pydantic import ValidationError

from activeform.constants import LogLevel
from activeform.settings import APP_VERSION, Settings


@pytest.mark.unit
def test_settings_read_prefixed_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ACTIVE_FORM_ENV", "staging")
    monkeypatch.setenv("ACTIVE_FORM_LOG_LEVEL", "warning")
    monkeypatch.setenv("ACTIVE_FORM_LOG_FORMAT", "JSON")

    settings = Settings()

    assert settings.environment == "staging"
    assert settings.log_level == "WARNING"
    assert settings.log_format == "json"
    assert settings.app_version == APP_VERSION


@pytest.mark.unit
def test_settings_reject_unknown_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ACTIVE_FORM_LOG_LEVEL", "LOUD")

    with pytest.raises(ValidationError):
        Settings()


@pytest.mark.unit
def test_settings_reject_unknown_log_format(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ACTIVE_FORM_LOG_FORMAT", "xml")

    with pytest.raises(ValidationError):
        Settings()


@pytest.mark.unit
def test_production_defaults_to_json_logs(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ACTIVE_FORM_ENV", "production")
    monkeypatch.delenv("ACTIVE_FORM_LOG_FORMAT", raising=False)

    settings = Settings()

    assert settings.is_production is True
    assert settings.log_format == "json"


@pytest.mark.unit
def test_production_keeps_explicit_log_format(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ACTIVE_FORM_ENV", "production")
    monkeypatch.setenv("ACTIVE_FORM_LOG_FORMAT", "console")

    assert Settings().log_format == "console"


@pytest.mark.unit
@pytest.mark.parametrize("level", [level.value for level in LogLevel])
def test_settings_accept_every_log_level(monkeypatch: pytest.MonkeyPatch, level: str) -> None:
    monkeypatch.setenv("ACTIVE_FORM_LOG_LEVEL", level.lower())

    assert Settings().log_level == level


@pytest.mark.unit
def test_settings_reject_numeric_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ACTIVE_FORM_LOG_LEVEL", "NOTSET")

    with pytest.raises(ValidationError):
        Settings()
