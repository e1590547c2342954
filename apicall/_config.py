"""Configuration file utilities: read, layer and atomically persist JSON objects."""

import json
import os
import tempfile
from pathlib import Path
from typing import Any

from ._logging import get_logger

LOGGER = get_logger("config")


def _validate_json_root(data: Any) -> dict[str, Any]:
    """Ensure configuration files deserialize to a dictionary root."""
    if isinstance(data, dict):
        return data
    raise ValueError("Config file must contain a JSON object at the root")


def read_json_file(file_path: str | Path) -> dict[str, Any]:
    """Read a JSON object from ``file_path``."""
    path = Path(file_path)
    raw_data = json.loads(path.read_text(encoding="utf-8"))
    LOGGER.info("Loaded JSON config from %s", path)
    return _validate_json_root(raw_data)


def write_json_file(file_path: str | Path, data: dict[str, Any], mode: int = 0o600) -> None:
    """Write ``data`` as indented JSON through a temporary file and rename it into place."""
    path = Path(file_path)
    payload = json.dumps(data, indent=2)

    fd, tmp_name = tempfile.mkstemp(prefix=f"{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(payload)
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise

    LOGGER.info("Persisted %s keys to %s", len(data), path)


def non_empty_values(values: dict[str, Any] | None) -> dict[str, Any]:
    """Drop keys with empty values so they do not override previous layers."""
    if not values:
        return {}
    return {key: value for key, value in values.items() if value not in (None, "")}


def merge_config_layers(layers: list[dict[str, Any]]) -> dict[str, Any]:
    """Merge config dictionaries in order where last layer wins."""
    merged: dict[str, Any] = {}
    for layer in layers:
        merged.update(layer)
    LOGGER.info("Merged %s config layers", len(layers))
    return merged


def missing_keys(config: dict[str, Any], required: tuple[str, ...]) -> list[str]:
    """Return the required keys whose value is absent or empty."""
    return [key for key in required if config.get(key) in (None, "")]
