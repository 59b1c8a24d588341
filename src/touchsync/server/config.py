from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class RelaySettings(BaseSettings):
    """
    Runtime config (relay).

    - Loaded from environment variables (TOUCHSYNC_RELAY_*)
    - Also reads `.env` if present (via pydantic-settings + python-dotenv)
    """

    model_config = SettingsConfigDict(env_file=".env", env_prefix="TOUCHSYNC_RELAY_", extra="ignore")

    host: str = "0.0.0.0"
    port: int = 8000

    # Broadcast a clearTouches for a client that drops while still touching.
    clear_on_disconnect: bool = True

    # Debugging
    debug_log_msgs: bool = False
    log_level: str = "INFO"


@lru_cache(maxsize=1)
def get_settings() -> RelaySettings:
    return RelaySettings()
