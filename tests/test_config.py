"""Tests for settings and logging setup."""

import logging
import os
from collections.abc import Iterator
from pathlib import Path

import pytest

from task_manager.config import load_settings
from task_manager.logging_setup import setup_logging

_VARS = (
    "TASKS_FILE",
    "EXPORT_FILE",
    "LOAD_ON_STARTUP",
    "LOG_LEVEL",
    "LOG_FILE",
    "CORS_ORIGINS",
    "HOST",
    "PORT",
)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> pytest.MonkeyPatch:
    """No TASK_MANAGER_* variables and no .env file in the working directory."""
    monkeypatch.chdir(tmp_path)
    for name in _VARS:
        monkeypatch.delenv(f"TASK_MANAGER_{name}", raising=False)
    return monkeypatch


@pytest.fixture
def restore_root_logger() -> Iterator[None]:
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for h in list(root.handlers):
        root.removeHandler(h)
        if h not in handlers:
            h.close()
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)


def test_defaults(clean_env: pytest.MonkeyPatch) -> None:
    """Test settings with nothing configured."""
    settings = load_settings()

    assert settings.tasks_file == Path("tasks.json")
    assert settings.export_file == Path("tasks.csv")
    assert settings.load_on_startup is True
    assert settings.log_level == "INFO"
    assert settings.log_file is None
    assert settings.cors_origins == ["http://localhost:3000"]
    assert settings.host == "127.0.0.1"
    assert settings.port == 8000


def test_environment_overrides(clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Test that prefixed variables are picked up."""
    clean_env.setenv("TASK_MANAGER_TASKS_FILE", str(tmp_path / "mine.json"))
    clean_env.setenv("TASK_MANAGER_LOAD_ON_STARTUP", "no")
    clean_env.setenv("TASK_MANAGER_LOG_LEVEL", "debug")
    clean_env.setenv("TASK_MANAGER_CORS_ORIGINS", "http://a.test, http://b.test")
    clean_env.setenv("TASK_MANAGER_PORT", "9001")

    settings = load_settings()

    assert settings.tasks_file == tmp_path / "mine.json"
    assert settings.load_on_startup is False
    assert settings.log_level == "DEBUG"
    assert settings.cors_origins == ["http://a.test", "http://b.test"]
    assert settings.port == 9001


def test_invalid_port_falls_back(clean_env: pytest.MonkeyPatch) -> None:
    """Test that an unparseable port keeps the default."""
    clean_env.setenv("TASK_MANAGER_PORT", "eighty")

    assert load_settings().port == 8000


def test_dotenv_file(clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Test that a .env file in the working directory is read."""
    (tmp_path / ".env").write_text("TASK_MANAGER_EXPORT_FILE=out/export.csv\n")

    settings = load_settings()

    # load_dotenv writes straight into os.environ
    os.environ.pop("TASK_MANAGER_EXPORT_FILE", None)
    assert settings.export_file == Path("out/export.csv")


def test_setup_logging_writes_file(tmp_path: Path, restore_root_logger: None) -> None:
    """Test that the optional log file receives debug records."""
    log_file = tmp_path / "logs" / "task_manager.log"

    setup_logging("WARNING", log_file)
    logging.getLogger("task_manager.tests").debug("hello %s", "file")
    for h in logging.getLogger().handlers:
        h.flush()

    assert "DEBUG task_manager.tests: hello file" in log_file.read_text(encoding="utf-8")


def test_setup_logging_replaces_handlers(restore_root_logger: None) -> None:
    """Test that calling setup twice does not stack handlers."""
    setup_logging()
    setup_logging()

    assert len(logging.getLogger().handlers) == 1


def test_blank_values_use_defaults(clean_env: pytest.MonkeyPatch) -> None:
    """Test that whitespace-only variables count as unset."""
    for name in ("TASKS_FILE", "LOAD_ON_STARTUP", "LOG_LEVEL", "CORS_ORIGINS", "HOST", "PORT"):
        clean_env.setenv(f"TASK_MANAGER_{name}", "   ")

    settings = load_settings()

    assert settings.tasks_file == Path("tasks.json")
    assert settings.load_on_startup is True
    assert settings.log_level == "INFO"
    assert settings.cors_origins == ["http://localhost:3000"]
    assert settings.host == "127.0.0.1"
    assert settings.port == 8000
