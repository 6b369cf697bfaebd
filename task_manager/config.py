"""Settings loaded from environment variables (+ optional .env).

Every variable uses the ``TASK_MANAGER_`` prefix. Unset values and unparseable
numbers fall back to their defaults; an unrecognised boolean reads as false.
"""

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

ENV_PREFIX = "TASK_MANAGER"
_TRUE = {"1", "true", "yes", "y", "on"}


def _raw(suffix: str) -> str | None:
    """Stripped value of ``TASK_MANAGER_<suffix>``, or None when unset or blank."""
    value = os.getenv(f"{ENV_PREFIX}_{suffix}", "").strip()
    return value or None


def _int(suffix: str, default: int) -> int:
    raw = _raw(suffix)
    try:
        return int(raw) if raw is not None else default
    except ValueError:
        return default


def _path(suffix: str) -> Path | None:
    raw = _raw(suffix)
    return Path(raw).expanduser() if raw is not None else None


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- Files ----
    tasks_file: Path
    export_file: Path
    load_on_startup: bool

    # ---- Logging ----
    log_level: str
    log_file: Path | None

    # ---- HTTP ----
    cors_origins: list[str]
    host: str
    port: int


def load_settings() -> Settings:
    """Build a Settings object from the current environment."""
    load_dotenv(find_dotenv(usecwd=True), override=False)
    load_on_startup = _raw("LOAD_ON_STARTUP")
    origins = _raw("CORS_ORIGINS") or "http://localhost:3000"
    return Settings(
        tasks_file=_path("TASKS_FILE") or Path("tasks.json"),
        export_file=_path("EXPORT_FILE") or Path("tasks.csv"),
        load_on_startup=load_on_startup is None or load_on_startup.lower() in _TRUE,
        log_level=(_raw("LOG_LEVEL") or "INFO").upper(),
        log_file=_path("LOG_FILE"),
        cors_origins=origins.replace(",", " ").split(),
        host=_raw("HOST") or "127.0.0.1",
        port=_int("PORT", 8000),
    )


@lru_cache
def get_settings() -> Settings:
    """Process-wide settings, read once."""
    return load_settings()
