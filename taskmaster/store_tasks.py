# -*- coding: utf-8 -*-

"""
Task Management - Task Store.

Ordered in-memory collection of tasks for one session, optionally
mirrored to a persistence backend. The backend is written first; the
in-memory collection only changes once the backend call succeeds.
"""

from typing import Callable, Dict, List, Optional

from loguru import logger

from taskmaster.backends import TaskBackend
from taskmaster.errors import BackendError, NotFoundError
from taskmaster.filters import compute_stats, filter_tasks
from taskmaster.models_tasks import Task, TaskFilter, TaskForm, TaskPriority, TaskStats, TaskStatus
from taskmaster.utils import generate_task_id, utc_now
from taskmaster.validation import ensure_valid_task_form, parse_deadline

Subscriber = Callable[["TaskStore"], None]


class TaskStore:
    """
    Session task collection with change notification.

    Insertion order is display order (newest last). Records loaded from a
    backend are re-sorted by creation time so that order holds whatever
    order the backend returns them in.
    """

    def __init__(self, backend: Optional[TaskBackend] = None):
        self._tasks: Dict[str, Task] = {}
        self._backend = backend
        self._subscribers: List[Subscriber] = []

    @property
    def backend(self) -> Optional[TaskBackend]:
        return self._backend

    # -------------------- lifecycle --------------------
    async def load(self) -> None:
        """Replace the collection with the backend's records (session start)."""
        if self._backend is None:
            return
        records = await self._backend.fetch()
        records = sorted(records, key=lambda t: t.created_at)
        self._tasks = {t.id: t for t in records}
        logger.info(f"Task store loaded {len(self._tasks)} task(s)")
        self._notify()

    async def close(self) -> None:
        """Release the backend and drop subscribers (session end)."""
        self._subscribers.clear()
        if self._backend is not None:
            await self._backend.close()

    # -------------------- subscriptions --------------------
    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """
        Register a callback invoked with the store after every mutation.

        Returns:
            Function that removes the subscription
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _notify(self) -> None:
        for callback in list(self._subscribers):
            try:
                callback(self)
            except Exception:
                logger.exception("Task store subscriber failed")

    # -------------------- queries --------------------
    def list(self) -> List[Task]:
        """All tasks in display order."""
        return list(self._tasks.values())

    def get(self, task_id: str) -> Task:
        task = self._tasks.get(task_id)
        if task is None:
            raise NotFoundError(task_id)
        return task

    def filter(self, criteria: Optional[TaskFilter] = None) -> List[Task]:
        return filter_tasks(self.list(), criteria)

    def stats(self) -> TaskStats:
        return compute_stats(self.list())

    def __len__(self) -> int:
        return len(self._tasks)

    # -------------------- task operations --------------------
    async def add(self, form: TaskForm) -> Task:
        """
        Create a task from form values.

        The form is validated here as well, so no record breaking the
        field rules ever enters the store. Status is always pending; title
        and description are trimmed and priority defaults to medium.

        Raises:
            ValidationError: If the form breaks any field rule
            BackendError: If the backend rejects the task or returns an id
                already in the store (the backend create is then undone)
        """
        ensure_valid_task_form(form)
        task = Task(
            id=generate_task_id(),
            title=form.title.strip(),
            description=(form.description or "").strip(),
            deadline=parse_deadline(form.deadline),
            priority=TaskPriority(form.priority) if form.priority else TaskPriority.medium,
            status=TaskStatus.pending,
            created_at=utc_now(),
        )
        if task.id in self._tasks:
            raise BackendError(f"Duplicate task id: {task.id}")
        if self._backend is not None:
            task = await self._backend.create(task)
            if task.id in self._tasks:
                await self._undo_create(task.id)
                raise BackendError(f"Duplicate task id from backend: {task.id}")
        self._tasks[task.id] = task
        logger.info(f"Task created: {task.id} - {task.title}")
        self._notify()
        return task

    async def _undo_create(self, task_id: str) -> None:
        try:
            await self._backend.delete(task_id)
        except BackendError as e:
            logger.error(f"Failed to undo create of duplicate task {task_id}: {e}")

    async def update_status(self, task_id: str, status: TaskStatus) -> Task:
        """Set a task's status; every other field is left untouched."""
        task = self.get(task_id)
        if task.status == status:
            return task
        if self._backend is not None:
            await self._backend.update_status(task_id, status)
        updated = task.model_copy(update={"status": status})
        self._tasks[task_id] = updated
        logger.info(f"Task status updated: {task_id} -> {status.value}")
        self._notify()
        return updated

    async def toggle_status(self, task_id: str) -> Task:
        """Flip a task between pending and completed."""
        task = self.get(task_id)
        if task.status == TaskStatus.completed:
            return await self.update_status(task_id, TaskStatus.pending)
        return await self.update_status(task_id, TaskStatus.completed)

    async def delete(self, task_id: str) -> None:
        self.get(task_id)
        if self._backend is not None:
            await self._backend.delete(task_id)
        del self._tasks[task_id]
        logger.info(f"Task deleted: {task_id}")
        self._notify()
