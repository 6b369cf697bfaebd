"""FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Annotated, Literal

from fastapi import Depends, FastAPI, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse

from task_manager.config import Settings, get_settings
from task_manager.errors import TaskFileError
from task_manager.models import FileResult, HealthResponse, Task, TaskCreate, TaskUpdate
from task_manager.store import TaskStore, store

logger = logging.getLogger(__name__)


def get_store() -> TaskStore:
    """The store every endpoint works on."""
    return store


StoreDep = Annotated[TaskStore, Depends(get_store)]
SettingsDep = Annotated[Settings, Depends(get_settings)]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    # Resolved like the endpoints' dependencies so overrides apply here too.
    settings: Settings = app.dependency_overrides.get(get_settings, get_settings)()
    task_store: TaskStore = app.dependency_overrides.get(get_store, get_store)()
    if settings.load_on_startup:
        try:
            task_store.load_from_file(settings.tasks_file)
        except TaskFileError:
            logger.exception("Starting with an empty task list")
    yield


app = FastAPI(
    title="Task Manager API",
    description="Single-user task tracking with JSON persistence and CSV export.",
    version="1.0.0",
    lifespan=lifespan,
)

# Configure CORS for frontend access
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Task not found",
    )


def _file_error(exc: TaskFileError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=str(exc),
    )


@app.get("/api/health", response_model=HealthResponse, tags=["System"])
async def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse()


@app.get("/api/tasks", response_model=list[Task], tags=["Tasks"])
async def list_tasks(
    store: StoreDep,
    q: str | None = None,
    completed: bool | None = None,
    sort: Literal["priority", "due_date"] | None = None,
) -> list[Task]:
    """List tasks, optionally searched, filtered by status and sorted."""
    if sort == "priority":
        tasks = store.sort_by_priority()
    elif sort == "due_date":
        tasks = store.sort_by_due_date()
    else:
        tasks = store.list_all()

    if q is not None:
        matched = {t.id for t in store.search(q)}
        tasks = [t for t in tasks if t.id in matched]
    if completed is not None:
        matched = {t.id for t in store.filter_by_status(completed)}
        tasks = [t for t in tasks if t.id in matched]
    return tasks


@app.post(
    "/api/tasks",
    response_model=Task,
    status_code=status.HTTP_201_CREATED,
    tags=["Tasks"],
)
async def create_task(data: TaskCreate, store: StoreDep) -> Task:
    """Create a new task."""
    return store.add(data.title, data.description, data.priority, data.due_date)


@app.get("/api/tasks/{task_id}", response_model=Task, tags=["Tasks"])
async def get_task(task_id: int, store: StoreDep) -> Task:
    """Get a specific task by ID."""
    task = store.get(task_id)
    if task is None:
        raise _not_found()
    return task


@app.put("/api/tasks/{task_id}", response_model=Task, tags=["Tasks"])
async def update_task(task_id: int, data: TaskUpdate, store: StoreDep) -> Task:
    """Replace every editable field of an existing task."""
    task = store.get(task_id)
    if task is None:
        raise _not_found()

    store.update(
        task_id,
        data.title,
        data.description,
        data.priority,
        data.due_date,
        data.completed,
    )
    return task


@app.post("/api/tasks/{task_id}/toggle", response_model=Task, tags=["Tasks"])
async def toggle_task(task_id: int, store: StoreDep) -> Task:
    """Flip a task between completed and pending."""
    task = store.get(task_id)
    if task is None:
        raise _not_found()

    store.toggle_completion(task_id)
    return task


@app.delete(
    "/api/tasks/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    tags=["Tasks"],
)
async def delete_task(task_id: int, store: StoreDep) -> None:
    """Delete a task."""
    if not store.delete(task_id):
        raise _not_found()


@app.post("/api/save", response_model=FileResult, tags=["Files"])
async def save_tasks(store: StoreDep, settings: SettingsDep) -> FileResult:
    """Write all tasks to the configured task file."""
    try:
        count = store.save_to_file(settings.tasks_file)
    except TaskFileError as exc:
        raise _file_error(exc) from exc
    return FileResult(path=str(settings.tasks_file), count=count)


@app.post("/api/load", response_model=FileResult, tags=["Files"])
async def load_tasks(store: StoreDep, settings: SettingsDep) -> FileResult:
    """Reload tasks from the configured task file."""
    try:
        store.load_from_file(settings.tasks_file)
    except TaskFileError as exc:
        raise _file_error(exc) from exc
    return FileResult(path=str(settings.tasks_file), count=len(store))


@app.get("/api/export", tags=["Files"])
async def export_tasks(store: StoreDep, settings: SettingsDep) -> FileResponse:
    """Export all tasks as CSV and send the file."""
    try:
        store.export_to_csv(settings.export_file)
    except TaskFileError as exc:
        raise _file_error(exc) from exc
    return FileResponse(
        settings.export_file,
        media_type="text/csv",
        filename=settings.export_file.name,
    )
