"""Application settings resolved from the environment and CLI flags."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping, Optional

from pydantic import BaseModel, Field

from confinement.sanitizer import DEFAULT_MAX_NAME_BYTES
from models.aliases import DEFAULT_ALIAS_CAPACITY

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class AppConfig(BaseModel):
    """Settings for one process run; the login pair is a stub, not real auth."""

    home: Path = Field(default_factory=Path.cwd)
    log_level: str = "WARNING"
    log_destination: str = "stderr"
    username: str = "ali"
    password: str = "1"
    max_name_bytes: int = Field(default=DEFAULT_MAX_NAME_BYTES, ge=2)
    max_aliases: int = Field(default=DEFAULT_ALIAS_CAPACITY, ge=1)


def load_config(env: Optional[Mapping[str, str]] = None, **overrides) -> AppConfig:
    """Build an :class:`AppConfig` from ``env`` (default ``os.environ``).

    Keyword overrides whose value is ``None`` are ignored, so parsed CLI
    arguments can be passed straight through. Raw environment strings are
    left for pydantic to coerce, so a malformed value raises
    :class:`pydantic.ValidationError`.
    """
    env = os.environ if env is None else env
    values = {
        "home": env.get("LOGISTICS_HOME") or os.getcwd(),
        "log_level": env.get("LOGISTICS_LOG_LEVEL", "WARNING").upper(),
        "log_destination": env.get("LOGISTICS_LOG_DESTINATION", "stderr"),
        "username": env.get("LOGISTICS_USERNAME", "ali"),
        "password": env.get("LOGISTICS_PASSWORD", "1"),
        "max_name_bytes": env.get("LOGISTICS_MAX_NAME_BYTES", DEFAULT_MAX_NAME_BYTES),
        "max_aliases": env.get("LOGISTICS_MAX_ALIASES", DEFAULT_ALIAS_CAPACITY),
    }
    values.update({key: value for key, value in overrides.items() if value is not None})
    return AppConfig(**values)
