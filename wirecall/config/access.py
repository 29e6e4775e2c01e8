"""Process-wide configuration for CLI commands.

A single :class:`Config` is kept. It is rebuilt when its sources change: the
config file location (which follows ``$HOME``) or any ``WIRECALL_*`` variable.
"""

from __future__ import annotations

import os
import threading

from wirecall.config.loader import get_config_path, load_config
from wirecall.config.schema import Config

ENV_PREFIX = Config.model_config["env_prefix"]

_lock = threading.RLock()
_cached: tuple[tuple, Config] | None = None


def settings_source() -> tuple:
    """Identity of everything ``load_config`` reads."""
    env = tuple(sorted((key, value) for key, value in os.environ.items() if key.upper().startswith(ENV_PREFIX)))
    return str(get_config_path()), env


def get_config(*, force_reload: bool = False) -> Config:
    global _cached
    source = settings_source()
    with _lock:
        if force_reload or _cached is None or _cached[0] != source:
            _cached = (source, load_config())
        return _cached[1]


def clear_config_cache() -> None:
    global _cached
    with _lock:
        _cached = None
