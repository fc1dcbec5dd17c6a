"""Application settings loaded from environment variables via pydantic-settings.

Two sources, in priority order:

  1. **Environment variables** — e.g. LASTFM_API_KEY=abc123
  2. **.env file** — key=value lines in the project root .env file

Field ``lastfm_api_key`` maps to env var ``LASTFM_API_KEY``.  List fields
such as ``streaming_providers`` take JSON, e.g.
``STREAMING_PROVIDERS='["openwhyd", "musicbrainz", "odesli"]'``.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from listening_to.models.options import DEFAULT_CACHE_TTL_MS, DEFAULT_PROVIDERS
from listening_to.models.track import ProviderName


class Settings(BaseSettings):
    """listening-to settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # === Last.fm ===
    # Empty string = "not configured"; the plugin refuses to start without both.
    lastfm_api_key: str = ""
    lastfm_user: str = ""

    # === Streaming links ===
    # Order is merge precedence: later providers override earlier ones.
    streaming_providers: list[ProviderName] = Field(default_factory=lambda: list(DEFAULT_PROVIDERS))

    # === Cache ===
    cache_ttl_ms: int = Field(default=DEFAULT_CACHE_TTL_MS, ge=0)

    # === HTTP ===
    http_timeout: float = Field(default=10.0, gt=0)
    http_user_agent: str = "listening-to/0.1.0"

    # === Cover art ===
    thumbnail_size: int = Field(default=50, gt=0)

    # === App Config ===
    app_env: str = "development"
    log_level: str = "INFO"
