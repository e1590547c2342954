"""Persistent ``.config`` holding the API host and bearer token."""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from ._config import merge_config_layers, missing_keys, non_empty_values, read_json_file, write_json_file
from ._logging import get_logger
from .errors import ConfigError, UsageError

CONFIG_PATH = Path(".config")
REQUIRED_KEYS = ("api_key", "host")
_CANONICAL_KEYS = {"host": "Host", "apikey": "APIKey"}
_SECRET_KEYS = {"api_key", "apikey", "authorization"}

logger = get_logger("config.store")


def redact_config(values: dict[str, Any]) -> dict[str, Any]:
    """Mask non-empty secrets before they reach logs or messages."""
    return {key: "***" if key.lower() in _SECRET_KEYS and value else value for key, value in values.items()}


class ApiConfig(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    host: str = Field(default="", alias="Host")
    api_key: str = Field(default="", alias="APIKey")

    @model_validator(mode="before")
    @classmethod
    def _normalize_stored_keys(cls, data: Any) -> Any:
        """Match key names case-insensitively and read ``null`` as an empty field."""
        if not isinstance(data, dict):
            return data
        return {
            _CANONICAL_KEYS.get(str(key).lower(), key): "" if value is None else value
            for key, value in data.items()
        }

    def to_file_dict(self) -> dict[str, str]:
        return self.model_dump(by_alias=True)


def _read_stored_config(path: Path) -> ApiConfig:
    try:
        return ApiConfig.model_validate(read_json_file(path))
    except (OSError, ValueError, ValidationError) as exc:
        raise ConfigError(f"Cannot read config {path}: {exc}") from exc


def save_config(config: ApiConfig, path: str | Path = CONFIG_PATH) -> None:
    try:
        write_json_file(path, config.to_file_dict())
    except OSError as exc:
        raise ConfigError(f"Cannot write config {path}: {exc}") from exc


def load_or_init(
    apikey_override: str = "",
    host_override: str = "",
    path: str | Path = CONFIG_PATH,
) -> ApiConfig:
    """Load the stored configuration, apply non-empty overrides and persist the result.

    On first run (no file at ``path``) both overrides are required and the file is
    created from them. Otherwise every non-empty override replaces the stored field
    and the merged configuration is written back, so later runs need fewer flags.
    """
    config_path = Path(path)
    overrides = non_empty_values({"api_key": apikey_override, "host": host_override})

    if not config_path.exists():
        missing = missing_keys(overrides, REQUIRED_KEYS)
        if missing:
            flags = ", ".join(f"-{key.replace('_', '')}" for key in missing)
            logger.info("No %s found and first-run flags missing: %s", config_path, flags)
            raise UsageError(f"{config_path} not found, first run requires {flags}")
        config = ApiConfig.model_validate(overrides)
        logger.info("Initializing %s", config_path)
    else:
        stored = _read_stored_config(config_path)
        merged = merge_config_layers([stored.model_dump(), overrides])
        config = ApiConfig.model_validate(merged)
        logger.info("Loaded %s with %s override(s)", config_path, len(overrides))

    save_config(config, config_path)
    logger.info("Config resolved: %s", redact_config(config.model_dump()))
    return config


def ensure_complete(config: ApiConfig) -> None:
    """Raise a usage error naming the empty fields when the configuration is incomplete."""
    if missing_keys(config.model_dump(), REQUIRED_KEYS):
        shown = redact_config(config.model_dump())
        raise UsageError(f"Config needed are empty: apikey='{shown['api_key']}', host='{shown['host']}'")
