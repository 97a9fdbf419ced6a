"""
Settings tests
"""
from fsm_engine.config import DEFAULT_LOG_FORMAT, Settings


def test_defaults(monkeypatch):
    for name in ("FSM_ENGINE_LOG_LEVEL", "FSM_ENGINE_LOG_FORMAT", "FSM_ENGINE_EXPORT_FORMAT"):
        monkeypatch.delenv(name, raising=False)
    settings = Settings.from_env(load_env_file=False)

    assert settings.log_level == "WARNING"
    assert settings.log_format == DEFAULT_LOG_FORMAT
    assert settings.export_format == "yaml"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("FSM_ENGINE_LOG_LEVEL", "debug")
    monkeypatch.setenv("FSM_ENGINE_EXPORT_FORMAT", "JSON")
    settings = Settings.from_env(load_env_file=False)

    assert settings.log_level == "DEBUG"
    assert settings.export_format == "json"
