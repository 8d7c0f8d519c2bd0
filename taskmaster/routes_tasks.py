# -*- coding: utf-8 -*-

"""
Task Management - API Routes.

CRUD endpoints for task management at /v1/tasks.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Security
from fastapi.responses import JSONResponse
from fastapi.security import APIKeyHeader
from loguru import logger

from taskmaster.errors import BackendError, NotFoundError, ValidationError
from taskmaster.models_tasks import (
    Task,
    TaskFilter,
    TaskForm,
    TaskListResponse,
    TaskPriority,
    TaskStats,
    TaskStatus,
    TaskStatusUpdate,
)
from taskmaster.store_tasks import TaskStore

# --- Security ---
api_key_header = APIKeyHeader(name="Authorization", auto_error=False)


async def verify_api_key(request: Request, auth_header: str = Security(api_key_header)) -> bool:
    """
    Verify API key in Authorization header.

    Expects format: "Bearer {key}". No key configured means open access.
    """
    expected = request.app.state.api_key
    if not expected:
        return True
    if not auth_header or not auth_header.startswith("Bearer ") or auth_header[7:] != expected:
        logger.warning("Access attempt with invalid API key.")
        raise HTTPException(status_code=401, detail="Invalid or missing API Key")
    return True


def get_task_store(request: Request) -> TaskStore:
    return request.app.state.task_store


# --- Router ---
router = APIRouter(prefix="/v1/tasks", dependencies=[Depends(verify_api_key)])


@router.post("", response_model=Task, status_code=201)
async def create_task(data: TaskForm, store: TaskStore = Depends(get_task_store)):
    """Validate the form and create a new task."""
    try:
        return await store.add(data)
    except ValidationError as e:
        logger.info(f"Task form rejected: {e.errors}")
        return JSONResponse(status_code=422, content={"detail": str(e), "errors": e.errors})
    except BackendError as e:
        raise HTTPException(status_code=502, detail=str(e))


@router.get("", response_model=TaskListResponse)
async def list_tasks(
    status: TaskStatus | None = Query(None, description="Filter by status"),
    priority: TaskPriority | None = Query(None, description="Filter by priority"),
    search: str | None = Query(None, description="Case-sensitive title search"),
    store: TaskStore = Depends(get_task_store),
):
    """List tasks matching every given filter, in display order."""
    tasks = store.filter(TaskFilter(status=status, priority=priority, search=search))
    return TaskListResponse(tasks=tasks, total=len(tasks))


@router.get("/stats", response_model=TaskStats)
async def get_stats(store: TaskStore = Depends(get_task_store)):
    """Total, completed and pending counts over all tasks."""
    return store.stats()


@router.get("/{task_id}", response_model=Task)
async def get_task(task_id: str, store: TaskStore = Depends(get_task_store)):
    """Get a single task by ID."""
    try:
        return store.get(task_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Task not found")


@router.patch("/{task_id}/status", response_model=Task)
async def update_task_status(
    task_id: str, data: TaskStatusUpdate, store: TaskStore = Depends(get_task_store)
):
    """Set a task's status."""
    try:
        return await store.update_status(task_id, data.status)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Task not found")
    except BackendError as e:
        raise HTTPException(status_code=502, detail=str(e))


@router.post("/{task_id}/toggle", response_model=Task)
async def toggle_task(task_id: str, store: TaskStore = Depends(get_task_store)):
    """Flip a task between pending and completed."""
    try:
        return await store.toggle_status(task_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Task not found")
    except BackendError as e:
        raise HTTPException(status_code=502, detail=str(e))


@router.delete("/{task_id}", status_code=204)
async def delete_task(task_id: str, store: TaskStore = Depends(get_task_store)):
    """Delete a task."""
    try:
        await store.delete(task_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Task not found")
    except BackendError as e:
        raise HTTPException(status_code=502, detail=str(e))
