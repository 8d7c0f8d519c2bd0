# -*- coding: utf-8 -*-

"""
Task Management - Pydantic Models.

Data models for task records, form input, filters and statistics.
"""

from datetime import date, datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class TaskStatus(str, Enum):
    """Task status options."""
    pending = "pending"
    completed = "completed"


class TaskPriority(str, Enum):
    """Task priority levels."""
    low = "low"
    medium = "medium"
    high = "high"


class TaskForm(BaseModel):
    """
    Candidate field values for a new task.

    Fields are kept loosely typed so the form validator, not the request
    parser, decides which inputs are acceptable and reports every
    violated rule at once.
    """
    title: str = Field("", description="Task title")
    description: str = Field("", description="Task description")
    deadline: Optional[str] = Field(None, description="Deadline as YYYY-MM-DD")
    priority: Optional[str] = Field(None, description="high, medium or low")


class Task(BaseModel):
    """Complete task representation."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    title: str
    description: str = ""
    deadline: Optional[date] = None
    priority: TaskPriority = TaskPriority.medium
    status: TaskStatus = TaskStatus.pending
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), alias="createdAt"
    )


class TaskFilter(BaseModel):
    """Filter criteria for deriving the visible subset of tasks."""
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    search: Optional[str] = None


class TaskStatusUpdate(BaseModel):
    """Request body for a status change."""
    status: TaskStatus


class TaskStats(BaseModel):
    total: int = 0
    completed: int = 0
    pending: int = 0


class TaskListResponse(BaseModel):
    """Filtered task list response."""
    tasks: List[Task]
    total: int
