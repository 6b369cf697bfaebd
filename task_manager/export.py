"""CSV export of tasks.

Display labels for priority and completion live here rather than on the
``Task`` model; they only matter for the exported table.
"""

import csv
from collections.abc import Iterable
from datetime import datetime
from typing import TextIO

from task_manager.models import Task

CSV_HEADER = ["ID", "Title", "Description", "Priority", "Due Date", "Created At", "Completed"]
PRIORITY_LABELS: dict[int, str] = {1: "Low", 2: "Medium", 3: "High"}
COMPLETED_LABELS: dict[bool, str] = {True: "Yes", False: "No"}
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M"


def priority_label(priority: int) -> str:
    """Return the display label for a priority, or the number itself if unknown."""
    return PRIORITY_LABELS.get(priority, str(priority))


def format_timestamp(value: datetime) -> str:
    # No timezone conversion; the value is rendered in its own offset.
    return value.strftime(TIMESTAMP_FORMAT)


def task_row(task: Task) -> list[str]:
    return [
        str(task.id),
        task.title,
        task.description,
        priority_label(task.priority),
        format_timestamp(task.due_date),
        format_timestamp(task.created_at),
        COMPLETED_LABELS[task.completed],
    ]


def write_csv(tasks: Iterable[Task], stream: TextIO) -> int:
    """Write the header and one row per task to ``stream``.

    Returns the number of task rows written.
    """
    writer = csv.writer(stream, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    count = 0
    for task in tasks:
        writer.writerow(task_row(task))
        count += 1
    return count
