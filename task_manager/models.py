"""Pydantic models for the task manager.

``Task`` is the stored record; its field names are the keys of the persisted
task file. The request bodies validate input at the HTTP boundary only, the
store itself accepts any values it is given.
"""

from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, Field


def _assume_local(value: datetime) -> datetime:
    # Naive input is taken as local time so every stored due date carries an offset.
    if value.tzinfo is None:
        return value.astimezone()
    return value


DueDate = Annotated[datetime, AfterValidator(_assume_local)]


class Task(BaseModel):
    """A single to-do item."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Unique identifier, never reused")
    title: str = Field(..., description="Short task title")
    description: str = Field(default="", description="Free-form details")
    priority: int = Field(default=2, description="1 (low), 2 (medium) or 3 (high)")
    due_date: datetime = Field(..., description="When the task is due")
    created_at: datetime = Field(..., description="When the task was created")
    completed: bool = Field(default=False, description="Whether the task has been completed")


class TaskCreate(BaseModel):
    """Request body for creating a new task."""

    title: str = Field(..., description="The task title")
    description: str = Field(default="", description="Free-form details")
    priority: int = Field(
        default=2,
        ge=1,
        le=3,
        description="1 (low), 2 (medium) or 3 (high)",
    )
    due_date: DueDate = Field(..., description="When the task is due; naive values are local time")


class TaskUpdate(BaseModel):
    """Request body for replacing every editable field of a task.

    There is no partial update; every field must be sent.
    """

    title: str
    description: str
    priority: int = Field(..., ge=1, le=3)
    due_date: DueDate
    completed: bool


class FileResult(BaseModel):
    """Outcome of a save or load of the task file."""

    path: str
    count: int


class HealthResponse(BaseModel):
    """Response from the health check endpoint."""

    status: str = "healthy"
    version: str = "1.0.0"
