"""Host-integration options for the listening-to plugin.

``PluginOptions`` is what a build host hands the plugin: Last.fm
credentials, the ordered provider list and the cache TTL.  The order of
``providers`` is the merge precedence: a provider listed later overrides
an earlier one for the same platform.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from listening_to.models.track import ProviderName
from listening_to.utils.errors import ConfigurationError

DEFAULT_PROVIDERS: tuple[ProviderName, ...] = (
    ProviderName.MUSICBRAINZ,
    ProviderName.OPENWHYD,
    ProviderName.ODESLI,
)

# 5 minutes
DEFAULT_CACHE_TTL_MS = 5 * 60 * 1000


class PluginOptions(BaseModel):
    """Validated plugin options.

    Attributes
    ----------
    api_key:
        Last.fm API key.
    user_id:
        Last.fm user whose most recent scrobble is resolved.
    providers:
        Enabled streaming-link providers, in precedence order (last wins).
        Duplicates are collapsed to their first occurrence.
    cache_ttl:
        Lifetime of a resolved track in milliseconds.
    """

    model_config = ConfigDict(frozen=True)

    api_key: str = ""
    user_id: str = ""
    providers: tuple[ProviderName, ...] = DEFAULT_PROVIDERS
    cache_ttl: int = Field(default=DEFAULT_CACHE_TTL_MS, ge=0)

    @field_validator("providers", mode="after")
    @classmethod
    def _dedupe_providers(cls, value: tuple[ProviderName, ...]) -> tuple[ProviderName, ...]:
        return tuple(dict.fromkeys(value))

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> PluginOptions:
        """Build options from the dict produced by ``load_config``."""
        lastfm = config.get("lastfm", {})
        streaming = config.get("streaming", {})
        cache = config.get("cache", {})
        raw: dict[str, Any] = {
            "api_key": lastfm.get("api_key", ""),
            "user_id": lastfm.get("user", ""),
        }
        if streaming.get("providers"):
            raw["providers"] = streaming["providers"]
        if cache.get("ttl_ms") is not None:
            raw["cache_ttl"] = cache["ttl_ms"]
        return resolve_options(raw)


def resolve_options(options: PluginOptions | dict[str, Any]) -> PluginOptions:
    """Validate raw options and apply defaults.

    Raises
    ------
    ConfigurationError
        If the API key or user id is missing, or an option is malformed.
        Raised before any network activity.
    """
    if isinstance(options, PluginOptions):
        resolved = options
    else:
        try:
            resolved = PluginOptions.model_validate(options)
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid plugin options: {exc}") from exc

    if not resolved.api_key or not resolved.user_id:
        raise ConfigurationError("API key and user ID must be specified")
    return resolved
