"""
MODULE OVERVIEW:
Process settings for the chat client tooling, using Pydantic Settings.

WHAT IS HAPPENING HERE:
The chat configuration itself is compiled in (see `chat_client.store`). The only
outside inputs are the host name the client is served from, which drives
environment detection, and the log level. Both come from `CHAT_*` environment
variables or a local `.env` file.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Host the client was loaded from; None means "not running behind a host",
    # so environment detection is skipped.
    HOSTNAME: str | None = None
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="CHAT_",
        env_file=".env",
        env_file_encoding="utf-8",
        # Tolerate unrelated env vars to allow easy out-of-the-box execution
        extra="ignore",
    )


settings = Settings()
