"""YAML configuration loader with environment variable overrides.

Configuration is loaded in layers (later layers override earlier):

  1. config/config.yaml  — Static defaults checked into the repo
  2. .env file           — Local developer overrides (not committed)
  3. Environment vars    — Set in CI at build time

Only settings that were actually provided (env var or .env entry)
override YAML.  A Settings default never masks a YAML value.

``settings_from_config`` turns the merged dict back into a ``Settings``
so the HTTP client, thumbnailer and logging see the same values the
plugin options do.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from listening_to.config.settings import Settings
from listening_to.utils.errors import ConfigurationError

# (section, key) in the YAML file -> Settings field.
_SETTINGS_FIELDS: dict[tuple[str, str], str] = {
    ("app", "env"): "app_env",
    ("lastfm", "api_key"): "lastfm_api_key",
    ("lastfm", "user"): "lastfm_user",
    ("streaming", "providers"): "streaming_providers",
    ("cache", "ttl_ms"): "cache_ttl_ms",
    ("http", "timeout"): "http_timeout",
    ("http", "user_agent"): "http_user_agent",
    ("thumbnail", "size"): "thumbnail_size",
    ("logging", "level"): "log_level",
}


def load_config(path: str = "config/config.yaml", settings: Settings | None = None) -> dict:
    """Load YAML config and merge with environment-based Settings.

    Args:
        path: Path to the YAML configuration file.
        settings: Pre-built Settings; read from the environment when omitted.

    Returns:
        Fully resolved configuration dictionary.
    """
    config_path = Path(path)
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            yaml_config = yaml.safe_load(f) or {}
    else:
        yaml_config = {}

    settings = settings or Settings()

    env_overrides: dict[str, dict[str, Any]] = {}
    for (section, key), field in _SETTINGS_FIELDS.items():
        if field not in settings.model_fields_set:
            continue
        value = getattr(settings, field)
        if field == "streaming_providers":
            value = [p.value for p in value]
        env_overrides.setdefault(section, {})[key] = value

    _deep_merge(yaml_config, env_overrides)
    return yaml_config


def settings_from_config(config: dict) -> Settings:
    """Build ``Settings`` from a merged config dict.

    Keys absent from *config* keep their Settings default.

    Raises:
        ConfigurationError: If a value does not validate, e.g. a negative
            ``thumbnail.size``.
    """
    values: dict[str, Any] = {}
    for (section, key), field in _SETTINGS_FIELDS.items():
        value = (config.get(section) or {}).get(key)
        if value is None or value == "":
            continue
        values[field] = value

    try:
        return Settings(**values)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid settings in config: {exc}") from exc


def _deep_merge(base: dict, overrides: dict) -> None:
    """Recursively merge overrides into base dict, mutating base in place.

    ``None`` and empty-string overrides are skipped.
    """
    for key, value in overrides.items():
        if value is None or value == "":
            continue
        if isinstance(value, dict):
            if not isinstance(base.get(key), dict):
                base[key] = {}
            _deep_merge(base[key], value)
        else:
            base[key] = value
