"""Router Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - Stack traces in 500 responses are OFF unless explicitly enabled
    - get_settings() is cached (lru_cache): single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - SCHEMA_ROUTER_ prefix: the library shares the host app's environment
    - Stack inclusion is opt-in: leaking tracebacks to clients is a disclosure risk
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class RouterSettings(BaseSettings):
    """Router settings from SCHEMA_ROUTER_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SCHEMA_ROUTER_", env_file=".env", case_sensitive=False,
        extra="ignore",
    )

    # Error responses
    include_error_stack: bool = False

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> RouterSettings:
    return RouterSettings()
