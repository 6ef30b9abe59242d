"""Configuration loader for the Pootle client."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from jsonschema import Draft7Validator

from cache import DEFAULT_CACHE_FILE

from .exceptions import ConfigError

CONFIG_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "required": ["base_url"],
    "properties": {
        "base_url": {"type": "string", "minLength": 1},
        "credentials": {"type": ["string", "null"]},
        "cache_file": {"type": "string", "minLength": 1},
        "timeout": {"type": "integer", "minimum": 1},
        "log_level": {
            "type": "string",
            "enum": ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        },
    },
}

_validator = Draft7Validator(CONFIG_SCHEMA)


def validate_config(payload: Dict[str, Any]) -> None:
    errors = sorted(_validator.iter_errors(payload), key=lambda e: list(e.path))
    if errors:
        messages = ", ".join(error.message for error in errors)
        raise ConfigError(f"config validation failed: {messages}")


@dataclass(frozen=True)
class PootleConfig:
    base_url: str
    credentials: Optional[str] = None
    cache_file: str = DEFAULT_CACHE_FILE
    timeout: int = 30
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PootleConfig":
        validate_config(data)
        return cls(
            base_url=data["base_url"],
            credentials=data.get("credentials"),
            cache_file=data.get("cache_file", DEFAULT_CACHE_FILE),
            timeout=int(data.get("timeout", 30)),
            log_level=data.get("log_level", "INFO"),
        )


ENV_MAP = {
    "base_url": "POOTLE_BASE_URL",
    "credentials": "POOTLE_CREDENTIALS",
    "cache_file": "POOTLE_CACHE_FILE",
    "timeout": "POOTLE_TIMEOUT",
    "log_level": "POOTLE_LOG_LEVEL",
}


def load_yaml(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle) or {}


def merge_env_overrides(config_data: Dict[str, Any]) -> Dict[str, Any]:
    merged = json.loads(json.dumps(config_data))  # deep copy via json

    for key, env_name in ENV_MAP.items():
        if env_name not in os.environ:
            continue
        value: Any = os.environ[env_name]
        if key == "timeout":
            try:
                value = int(value)
            except ValueError as exc:
                raise ConfigError(f"{env_name} must be an integer, got {value!r}") from exc
        elif key == "log_level":
            value = value.upper()
        merged[key] = value

    return merged


def load_config(config_path: str | Path = "config/pootle-client.yml") -> PootleConfig:
    path = Path(config_path)
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")

    data = load_yaml(path)
    data = merge_env_overrides(data)
    return PootleConfig.from_dict(data)
