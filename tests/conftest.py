"""Pytest fixtures for the Task Manager tests."""

from collections.abc import Iterator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from task_manager.config import Settings, get_settings
from task_manager.main import app, get_store
from task_manager.store import TaskStore


@pytest.fixture
def store() -> TaskStore:
    """A fresh, empty task store."""
    return TaskStore()


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings pointing every file at the test's tmp dir."""
    return Settings(
        tasks_file=tmp_path / "tasks.json",
        export_file=tmp_path / "tasks.csv",
        load_on_startup=False,
        log_level="DEBUG",
        log_file=None,
        cors_origins=["http://localhost:3000"],
        host="127.0.0.1",
        port=8000,
    )


@pytest.fixture
def client(store: TaskStore, settings: Settings) -> Iterator[TestClient]:
    """Create a test client for the API, wired to the fresh store and settings."""
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_settings] = lambda: settings
    yield TestClient(app)
    app.dependency_overrides.clear()
