"""Configuration loading utilities."""

import json
from pathlib import Path
from typing import Any, Callable

from wirecall.config.schema import Config
from wirecall.naming import to_identifier_form, to_wire_form

# Mappings whose keys are user data (HTTP header names) and must not be re-cased.
_VERBATIM_KEYS = {"headers"}


def get_config_path() -> Path:
    """Get the default configuration file path."""
    return Path.home() / ".wirecall" / "config.json"


def load_config(config_path: Path | None = None) -> Config:
    """
    Load configuration from file or create default.

    Args:
        config_path: Optional path to config file. Uses default if not provided.

    Returns:
        Loaded configuration object.
    """
    path = config_path or get_config_path()

    if path.exists():
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("config file must contain a JSON object")
            return Config(**convert_keys(data))
        except (json.JSONDecodeError, ValueError) as e:
            raise ValueError(
                f"Failed to load config from {path}: {e}. "
                "Fix the file or remove it to regenerate defaults."
            ) from e

    return Config()


def save_config(config: Config, config_path: Path | None = None) -> Path:
    """
    Save configuration to file.

    Args:
        config: Configuration to save.
        config_path: Optional path to save to. Uses default if not provided.
    """
    path = config_path or get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    data = convert_to_camel(config.model_dump())

    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
    return path


def snake_to_camel(name: str) -> str:
    return to_identifier_form(name.replace("_", "-"))


def camel_to_snake(name: str) -> str:
    return to_wire_form(name).replace("-", "_")


def _rekey(data: Any, rename: Callable[[str], str]) -> Any:
    if isinstance(data, dict):
        result: dict[str, Any] = {}
        for key, value in data.items():
            new_key = rename(key)
            verbatim = new_key in _VERBATIM_KEYS and isinstance(value, dict)
            result[new_key] = dict(value) if verbatim else _rekey(value, rename)
        return result
    if isinstance(data, list):
        return [_rekey(item, rename) for item in data]
    return data


def convert_keys(data: Any) -> Any:
    """camelCase file keys to snake_case fields. Header mappings are kept verbatim."""
    return _rekey(data, camel_to_snake)


def convert_to_camel(data: Any) -> Any:
    return _rekey(data, snake_to_camel)
