"""Configuration loaded from the environment (and an optional .env file)."""
from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from loguru import logger

log = logger.bind(name=__name__)

ENV_PREFIX = "JSON_TOOLBOX_"
ALLOWED_INDENTS = (2, 4, 8)


def _env(key: str, default: str = "") -> str:
    return os.getenv(f"{ENV_PREFIX}{key}", default).strip()


def _get_positive_int(key: str, default: int) -> int:
    raw_value = _env(key, str(default))
    try:
        value = int(raw_value)
    except ValueError:
        log.warning("Invalid int env {}{}={}, using default={}", ENV_PREFIX, key, raw_value, default)
        return default
    if value <= 0:
        log.warning("Non-positive env {}{}={}, using default={}", ENV_PREFIX, key, raw_value, default)
        return default
    return value


def _get_indent(default: int = 2) -> int:
    value = _get_positive_int("DEFAULT_INDENT", default)
    if value not in ALLOWED_INDENTS:
        log.warning("Unsupported indent {}, using default={}", value, default)
        return default
    return value


@dataclass(frozen=True)
class Settings:
    history_limit: int = 10
    default_indent: int = 2
    log_level: str = "INFO"
    log_file: Optional[str] = None
    server_name: str = "127.0.0.1"
    server_port: int = 7860

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            history_limit=_get_positive_int("HISTORY_LIMIT", 10),
            default_indent=_get_indent(2),
            log_level=(_env("LOG_LEVEL", "INFO") or "INFO").upper(),
            log_file=_env("LOG_FILE") or None,
            server_name=_env("SERVER_NAME", "127.0.0.1") or "127.0.0.1",
            server_port=_get_positive_int("SERVER_PORT", 7860),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    load_dotenv(override=False)
    return Settings.from_env()
