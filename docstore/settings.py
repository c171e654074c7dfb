from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from .errors import ConfigurationError

DEFAULT_CACHE_CAPACITY = 1000


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from e


@dataclass(frozen=True)
class Settings:
    # Maximum number of documents kept in the in-process cache
    cache_capacity: int = DEFAULT_CACHE_CAPACITY

    # Emit timestamped trace lines for every protocol step
    debug: bool = False

    def __post_init__(self) -> None:
        if self.cache_capacity < 1:
            raise ConfigurationError(f"cache_capacity must be >= 1, got {self.cache_capacity}")


def get_settings(env_file: str | os.PathLike[str] | None = None) -> Settings:
    """
    Build settings from the environment.

    If `env_file` is given it is loaded first; variables already present in
    the environment win over the file.
    """
    if env_file is not None:
        load_dotenv(env_file)

    cache_capacity = _env_int("DOCSTORE_CACHE_CAPACITY", DEFAULT_CACHE_CAPACITY)
    debug = _env_bool("DOCSTORE_DEBUG", False)

    return Settings(cache_capacity=cache_capacity, debug=debug)
