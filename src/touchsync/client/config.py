from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    """
    Runtime config (client).

    - Loaded from environment variables (TOUCHSYNC_*)
    - Also reads `.env` if present (via pydantic-settings + python-dotenv)
    """

    model_config = SettingsConfigDict(env_file=".env", env_prefix="TOUCHSYNC_", extra="ignore")

    # ws:// or wss:// URL of the relay; an http(s) page URL is mapped to ws(s).
    relay_url: str = "ws://127.0.0.1:8000/ws"

    # Fixed-interval reconnect, no backoff or jitter.
    reconnect_interval_s: float = 3.0

    # Debugging
    debug_log_msgs: bool = False
    log_level: str = "INFO"


@lru_cache(maxsize=1)
def get_settings() -> ClientSettings:
    return ClientSettings()
