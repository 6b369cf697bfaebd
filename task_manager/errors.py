"""Exceptions raised by the task store.

Looking up a missing task is not an error; only file operations raise.
"""

from pathlib import Path


class TaskStoreError(Exception):
    """Base class for task store failures."""


class TaskFileError(TaskStoreError):
    """Reading or writing a task file (or CSV export) failed."""

    def __init__(self, path: str | Path, message: str) -> None:
        self.path = Path(path)
        super().__init__(f"{self.path}: {message}")


class MalformedTaskFileError(TaskFileError):
    """The task file exists but does not hold a valid list of tasks."""
