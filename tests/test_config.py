"""Router Configuration: verifies defaults, env overrides and caching."""

from schema_router.config import RouterSettings, get_settings


def test_defaults_keep_stack_traces_private():
    settings = RouterSettings(_env_file=None)
    assert settings.include_error_stack is False
    assert settings.log_level == "INFO"
    assert settings.log_format == "json"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("SCHEMA_ROUTER_INCLUDE_ERROR_STACK", "1")
    monkeypatch.setenv("SCHEMA_ROUTER_LOG_FORMAT", "text")
    settings = RouterSettings(_env_file=None)
    assert settings.include_error_stack is True
    assert settings.log_format == "text"


def test_unprefixed_variables_ignored(monkeypatch):
    monkeypatch.setenv("INCLUDE_ERROR_STACK", "true")
    assert RouterSettings(_env_file=None).include_error_stack is False


def test_get_settings_is_cached():
    assert get_settings() is get_settings()
