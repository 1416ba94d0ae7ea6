"""YAML config loader with runtime get/set."""

import json
from pathlib import Path
from typing import Any

import yaml

from meteociel.config.schema import MeteocielConfig


def load_config(path: str | Path | None = None) -> MeteocielConfig:
    """Load and validate config from a YAML file.

    Without a path, or with an empty file, all defaults apply.
    """
    if path is None:
        return MeteocielConfig()
    path = Path(path)
    with open(path) as f:
        raw = yaml.safe_load(f) or {}
    return MeteocielConfig(**raw)


def get_config_value(config: MeteocielConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'client.timeout'."""
    parts = dotted_key.split(".")
    obj: Any = config
    for part in parts:
        if hasattr(obj, part):
            obj = getattr(obj, part)
        elif isinstance(obj, dict):
            obj = obj[part]
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj


def set_config_value(config: MeteocielConfig, dotted_key: str, value: Any) -> MeteocielConfig:
    """Set a config value by dotted key path and re-validate.

    Returns a new MeteocielConfig instance.
    """
    data = json.loads(config.model_dump_json())
    parts = dotted_key.split(".")
    target = data
    for part in parts[:-1]:
        target = target[part]
    if parts[-1] not in target:
        raise KeyError(f"Config key not found: {dotted_key}")
    # Attempt type coercion for common cases
    old_value = target[parts[-1]]
    if isinstance(old_value, bool) and isinstance(value, str):
        value = value.lower() in ("1", "true", "yes", "on")
    elif isinstance(old_value, int) and isinstance(value, str):
        value = int(value)
    elif isinstance(old_value, float) and isinstance(value, str):
        value = float(value)
    target[parts[-1]] = value
    return MeteocielConfig(**data)
