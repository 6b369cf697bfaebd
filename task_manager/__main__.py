"""Serve the task manager API with uvicorn."""

import uvicorn

from task_manager.config import get_settings
from task_manager.logging_setup import setup_logging


def main() -> None:
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_file)
    # log_config=None keeps uvicorn from replacing our handlers.
    uvicorn.run("task_manager.main:app", host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
