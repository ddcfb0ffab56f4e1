import pytest

from pacecalc.config import Settings, load_settings
from pacecalc.core.models import Mode


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in [
        "PACECALC_DEFAULT_KPH",
        "PACECALC_DEFAULT_PACE",
        "PACECALC_DEFAULT_BASE_PACE",
        "PACECALC_DEFAULT_PERCENTAGES",
        "PACECALC_DEFAULT_MODE",
        "PACECALC_LOG_LEVEL",
        "PACECALC_LOG_FILE",
    ]:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = load_settings()
    assert settings == Settings()
    assert settings.default_kph == 10.0
    assert settings.default_base_pace == "6:00"
    assert settings.default_percentages == "50, 60, 70, 80, 90, 100, 105, 110"
    assert settings.default_mode is Mode.SPEED


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("PACECALC_DEFAULT_KPH", "12.5")
    monkeypatch.setenv("PACECALC_DEFAULT_BASE_PACE", "5:15")
    monkeypatch.setenv("PACECALC_DEFAULT_MODE", " Pace ")
    monkeypatch.setenv("PACECALC_LOG_LEVEL", "debug")
    settings = load_settings()
    assert settings.default_kph == 12.5
    assert settings.default_base_pace == "5:15"
    assert settings.default_mode is Mode.PACE
    assert settings.log_level == "DEBUG"
    assert settings.log_file is None


def test_bad_speed_is_a_config_error(monkeypatch):
    monkeypatch.setenv("PACECALC_DEFAULT_KPH", "fast")
    with pytest.raises(ValueError, match="PACECALC_DEFAULT_KPH"):
        load_settings()


def test_bad_mode_is_a_config_error(monkeypatch):
    monkeypatch.setenv("PACECALC_DEFAULT_MODE", "cadence")
    with pytest.raises(ValueError, match="speed, pace"):
        load_settings()


def test_bad_log_level_is_a_config_error(monkeypatch):
    monkeypatch.setenv("PACECALC_LOG_LEVEL", "loud")
    with pytest.raises(ValueError, match="PACECALC_LOG_LEVEL"):
        load_settings()


def test_loguru_only_levels_are_accepted(monkeypatch):
    monkeypatch.setenv("PACECALC_LOG_LEVEL", "success")
    assert load_settings().log_level == "SUCCESS"
