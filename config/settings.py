"""
Global configuration for the business-day calendar library.

All values are read from environment variables (prefixed DATES_).
Defaults are safe for local development; override via .env or the environment.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="DATES_", env_file=".env")

    # ── Time zones ────────────────────────────────────────────────────────
    default_timezone: str = "UTC"                 # IANA name used when no zone is given

    # ── Holiday predicate source ──────────────────────────────────────────
    holiday_country: str = "US"                   # ISO 3166 code understood by `holidays`
    holiday_subdiv: str = ""                      # empty = national holidays only
    holiday_observed: bool = True                 # weekend holidays shift to the observed weekday

    # ── HTTP API ──────────────────────────────────────────────────────────
    api_host: str = "0.0.0.0"
    api_port: int = 3001

    # ── Logging ───────────────────────────────────────────────────────────
    log_level: str = "INFO"


settings = Settings()
