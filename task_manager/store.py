"""In-memory task storage.

All tasks live in a single ordered list owned by ``TaskStore``; callers only
ever touch it through the store's methods. The list can be written to and
read back from a JSON file, and exported as CSV.
"""

import logging
from datetime import datetime
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from task_manager.errors import MalformedTaskFileError, TaskFileError
from task_manager.export import write_csv
from task_manager.models import Task

logger = logging.getLogger(__name__)

# A file holding ``null`` is an empty list.
_TASK_FILE = TypeAdapter(list[Task] | None)


class TaskStore:
    """Simple in-memory task storage with JSON persistence."""

    def __init__(self) -> None:
        """Initialize an empty task store."""
        self._tasks: list[Task] = []
        self._next_id: int = 1

    def __len__(self) -> int:
        return len(self._tasks)

    @property
    def next_id(self) -> int:
        """The id the next added task will receive."""
        return self._next_id

    def list_all(self) -> list[Task]:
        """Return all tasks in insertion order."""
        return list(self._tasks)

    def add(self, title: str, description: str, priority: int, due_date: datetime) -> Task:
        """Create a new task, append it and return it."""
        task = Task(
            id=self._next_id,
            title=title,
            description=description,
            priority=priority,
            due_date=due_date,
            created_at=datetime.now().astimezone(),
            completed=False,
        )
        self._tasks.append(task)
        self._next_id += 1
        logger.debug("Task added id=%s priority=%s due=%s", task.id, priority, due_date)
        return task

    def get(self, task_id: int) -> Task | None:
        """Get a task by its ID, or None if not found."""
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def delete(self, task_id: int) -> bool:
        """Delete a task. Returns True if deleted, False if not found."""
        for index, task in enumerate(self._tasks):
            if task.id == task_id:
                del self._tasks[index]
                logger.debug("Task deleted id=%s", task_id)
                return True
        return False

    def update(
        self,
        task_id: int,
        title: str,
        description: str,
        priority: int,
        due_date: datetime,
        completed: bool,
    ) -> bool:
        """Overwrite every editable field of a task.

        ``id`` and ``created_at`` are left alone. Returns False if not found.
        """
        task = self.get(task_id)
        if task is None:
            return False

        task.title = title
        task.description = description
        task.priority = priority
        task.due_date = due_date
        task.completed = completed
        logger.debug("Task updated id=%s completed=%s", task_id, completed)
        return True

    def toggle_completion(self, task_id: int) -> bool:
        """Flip a task's completed flag. Returns False if not found."""
        task = self.get(task_id)
        if task is None:
            return False

        task.completed = not task.completed
        logger.debug("Task toggled id=%s completed=%s", task_id, task.completed)
        return True

    def search(self, keyword: str) -> list[Task]:
        """Return tasks whose title or description contains ``keyword``, ignoring case."""
        keyword = keyword.lower()
        return [
            task
            for task in self._tasks
            if keyword in task.title.lower() or keyword in task.description.lower()
        ]

    def filter_by_status(self, completed: bool) -> list[Task]:
        """Return tasks whose completed flag equals ``completed``."""
        return [task for task in self._tasks if task.completed == completed]

    def sort_by_priority(self) -> list[Task]:
        """Return all tasks, highest priority first."""
        return sorted(self._tasks, key=lambda t: t.priority, reverse=True)

    def sort_by_due_date(self) -> list[Task]:
        """Return all tasks, soonest due date first."""
        return sorted(self._tasks, key=lambda t: t.due_date)

    # ---- persistence ----

    def save_to_file(self, path: str | Path) -> int:
        """Write all tasks to ``path`` as JSON, replacing its contents.

        Returns the number of tasks written.
        """
        path = Path(path)
        data = _TASK_FILE.dump_json(self._tasks, indent=2)
        try:
            path.write_bytes(data)
        except OSError as exc:
            logger.exception("Failed to save tasks to %s", path)
            raise TaskFileError(path, f"cannot write task file: {exc}") from exc
        logger.info("Saved %s tasks to %s", len(self._tasks), path)
        return len(self._tasks)

    def load_from_file(self, path: str | Path) -> bool:
        """Replace the stored tasks with the contents of ``path``.

        A missing file is not an error: nothing changes and False is returned.
        On any failure the stored tasks are left untouched.
        """
        path = Path(path)
        try:
            data = path.read_bytes()
        except FileNotFoundError:
            logger.info("No task file at %s; starting empty", path)
            return False
        except OSError as exc:
            logger.exception("Failed to read tasks from %s", path)
            raise TaskFileError(path, f"cannot read task file: {exc}") from exc

        try:
            tasks = _TASK_FILE.validate_json(data) or []
        except ValidationError as exc:
            raise MalformedTaskFileError(path, f"invalid task file: {exc}") from exc

        ids = [task.id for task in tasks]
        if len(set(ids)) != len(ids):
            raise MalformedTaskFileError(path, "duplicate task ids")

        self._tasks = tasks
        if ids:
            self._next_id = max(self._next_id, max(ids) + 1)
        logger.info("Loaded %s tasks from %s next_id=%s", len(tasks), path, self._next_id)
        return True

    def export_to_csv(self, path: str | Path) -> int:
        """Write all tasks to ``path`` as a CSV table.

        Returns the number of task rows written.
        """
        path = Path(path)
        try:
            with open(path, "w", newline="", encoding="utf-8") as f:
                count = write_csv(self._tasks, f)
        except OSError as exc:
            logger.exception("Failed to export tasks to %s", path)
            raise TaskFileError(path, f"cannot write CSV export: {exc}") from exc
        logger.info("Exported %s tasks to %s", count, path)
        return count


# Global store instance
store = TaskStore()
