# tests/fakes.py

from __future__ import annotations

from typing import List, Optional

from taskmaster.backends import TaskBackend
from taskmaster.errors import BackendError
from taskmaster.filters import filter_tasks
from taskmaster.models_tasks import Task, TaskFilter, TaskStatus


class FakeBackend(TaskBackend):
    """In-memory backend that records calls and can be told to fail."""

    def __init__(self, records: Optional[List[Task]] = None) -> None:
        self.records: List[Task] = list(records or [])
        self.calls: List[tuple] = []
        self.fail = False
        self.closed = False
        self._next_id = 100

    def _maybe_fail(self) -> None:
        if self.fail:
            raise BackendError("backend unavailable")

    async def fetch(self, criteria: Optional[TaskFilter] = None) -> List[Task]:
        self.calls.append(("fetch", criteria))
        self._maybe_fail()
        return filter_tasks(self.records, criteria)

    async def create(self, task: Task) -> Task:
        self.calls.append(("create", task.title))
        self._maybe_fail()
        self._next_id += 1
        created = task.model_copy(update={"id": str(self._next_id)})
        self.records.append(created)
        return created

    async def update_status(self, task_id: str, status: TaskStatus) -> None:
        self.calls.append(("update_status", task_id, status))
        self._maybe_fail()

    async def delete(self, task_id: str) -> None:
        self.calls.append(("delete", task_id))
        self._maybe_fail()

    async def close(self) -> None:
        self.closed = True
