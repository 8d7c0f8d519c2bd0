# -*- coding: utf-8 -*-

"""
Task persistence backends.

A backend is the store's record of truth outside the process:
- LocalJsonBackend keeps the whole collection in one JSON file slot,
  read once and rewritten after every mutation.
- RemoteRecordBackend talks to a hosted record API (backend-as-a-service)
  over HTTP.

Raw records from either source go through normalize_record, which applies
the field defaults and produces a strict Task.
"""

import json
import shutil
from abc import ABC, abstractmethod
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional

import httpx
from loguru import logger
from pydantic import ValidationError as PydanticValidationError

from taskmaster.errors import BackendError, NotFoundError
from taskmaster.filters import filter_tasks
from taskmaster.models_tasks import Task, TaskFilter, TaskPriority, TaskStatus
from taskmaster.utils import parse_timestamp, utc_now

UNTITLED_TASK = "Untitled Task"


def _text(value: Any, default: str) -> str:
    """Coerces a raw field to text; missing or empty values take the default."""
    if value is None or value == "":
        return default
    if isinstance(value, str):
        return value
    return str(value)


def _choice(value: Any, allowed: set, default: str, record_id: Any, field: str) -> str:
    if value is None or value == "":
        return default
    if not isinstance(value, str) or value not in allowed:
        logger.warning(f"Record {record_id}: unknown {field} {value!r}, using {default}")
        return default
    return value


def normalize_record(raw: Dict[str, Any]) -> Task:
    """
    Maps a raw backend record to a Task.

    Accepts both the remote shape (Id, CreatedOn) and the local shape
    (id, createdAt). Each field is coerced on its own; missing or unusable
    values get their defaults:
    title -> "Untitled Task", description -> "", deadline -> None,
    priority -> medium, status -> pending, creation time -> now.
    Non-text titles and descriptions are converted to text.

    Raises:
        BackendError: If the record is not a mapping or carries no id
    """
    if not isinstance(raw, dict):
        raise BackendError(f"Record is not an object: {raw!r}")
    record_id = raw.get("Id", raw.get("id"))
    if record_id is None or record_id == "" or isinstance(record_id, (dict, list, bool)):
        raise BackendError("Record without id")

    priority = _choice(raw.get("priority"), {p.value for p in TaskPriority},
                       TaskPriority.medium.value, record_id, "priority")
    status = _choice(raw.get("status"), {s.value for s in TaskStatus},
                     TaskStatus.pending.value, record_id, "status")

    deadline = None
    raw_deadline = raw.get("deadline")
    if raw_deadline:
        try:
            deadline = date.fromisoformat(str(raw_deadline)[:10])
        except ValueError:
            logger.warning(f"Record {record_id}: invalid deadline {raw_deadline!r} dropped")

    created_raw = raw.get("CreatedOn") or raw.get("createdAt") or raw.get("created_at")
    created_at = parse_timestamp(created_raw) if isinstance(created_raw, str) else None
    if created_at is None:
        if created_raw:
            logger.warning(f"Record {record_id}: invalid creation time {created_raw!r}, using now")
        created_at = utc_now()

    try:
        return Task(
            id=str(record_id),
            title=_text(raw.get("title"), UNTITLED_TASK),
            description=_text(raw.get("description"), ""),
            deadline=deadline,
            priority=TaskPriority(priority),
            status=TaskStatus(status),
            created_at=created_at,
        )
    except PydanticValidationError as e:
        raise BackendError(f"Record {record_id} is malformed: {e}") from e


def normalize_records(raws: Any) -> List[Task]:
    """
    Normalizes a batch of raw records, skipping (and logging) the ones
    that cannot be turned into a Task.
    """
    if not isinstance(raws, list):
        logger.warning(f"Expected a list of records, got {type(raws).__name__}")
        return []
    tasks = []
    for raw in raws:
        try:
            tasks.append(normalize_record(raw))
        except BackendError as e:
            logger.warning(f"Skipping record: {e}")
    return tasks


class TaskBackend(ABC):
    """Persistence contract used by TaskStore."""

    @abstractmethod
    async def fetch(self, criteria: Optional[TaskFilter] = None) -> List[Task]:
        """Fetch records matching the criteria."""

    @abstractmethod
    async def create(self, task: Task) -> Task:
        """Persist a new task. Returns the stored record, which may carry a new id."""

    @abstractmethod
    async def update_status(self, task_id: str, status: TaskStatus) -> None:
        ...

    @abstractmethod
    async def delete(self, task_id: str) -> None:
        ...

    async def close(self) -> None:
        """Release resources held by the backend."""


class LocalJsonBackend(TaskBackend):
    """Whole-collection JSON file slot, the local-storage variant."""

    def __init__(self, storage_path: str = "tasks.json"):
        self._storage_path = Path(storage_path)
        self._tasks: List[Task] = []
        self._loaded = False

    @property
    def backup_path(self) -> Path:
        return self._storage_path.with_name(self._storage_path.name + ".corrupt")

    def _load(self) -> None:
        """
        Read the slot once; a missing file means no tasks.

        A file that cannot be parsed, or holds records that had to be
        skipped, is copied to backup_path before anything can overwrite it.
        If the copy fails the slot stays unloaded and every operation
        raises BackendError.
        """
        if not self._storage_path.exists():
            self._loaded = True
            return
        try:
            data = json.loads(self._storage_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.error(f"Failed to read tasks from {self._storage_path}: {e}")
            self._backup()
            self._tasks = []
            self._loaded = True
            return

        raws = data.get("tasks", []) if isinstance(data, dict) else data
        tasks = normalize_records(raws)
        if not isinstance(raws, list) or len(tasks) != len(raws):
            self._backup()
        self._tasks = tasks
        self._loaded = True
        logger.info(f"Loaded {len(self._tasks)} task(s) from {self._storage_path}")

    def _backup(self) -> None:
        try:
            shutil.copyfile(self._storage_path, self.backup_path)
        except OSError as e:
            logger.error(f"Failed to back up {self._storage_path}: {e}")
            raise BackendError(f"Task file {self._storage_path} is unreadable and could not be backed up") from e
        logger.warning(f"Unreadable task data backed up to {self.backup_path}")

    def _save(self, tasks: List[Task]) -> None:
        data = {"tasks": [t.model_dump(mode="json", by_alias=True) for t in tasks]}
        try:
            self._storage_path.parent.mkdir(parents=True, exist_ok=True)
            self._storage_path.write_text(
                json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8"
            )
        except OSError as e:
            logger.error(f"Failed to save tasks to {self._storage_path}: {e}")
            raise BackendError(f"Failed to save tasks: {e}") from e
        self._tasks = tasks

    def _ensure_loaded(self) -> None:
        if not self._loaded:
            self._load()

    def _index(self, task_id: str) -> int:
        for i, task in enumerate(self._tasks):
            if task.id == task_id:
                return i
        raise NotFoundError(task_id)

    async def fetch(self, criteria: Optional[TaskFilter] = None) -> List[Task]:
        self._ensure_loaded()
        return filter_tasks(self._tasks, criteria)

    async def create(self, task: Task) -> Task:
        self._ensure_loaded()
        self._save(self._tasks + [task])
        return task

    async def update_status(self, task_id: str, status: TaskStatus) -> None:
        self._ensure_loaded()
        idx = self._index(task_id)
        tasks = list(self._tasks)
        tasks[idx] = tasks[idx].model_copy(update={"status": status})
        self._save(tasks)

    async def delete(self, task_id: str) -> None:
        self._ensure_loaded()
        idx = self._index(task_id)
        self._save(self._tasks[:idx] + self._tasks[idx + 1:])


class RemoteRecordBackend(TaskBackend):
    """
    Hosted record API backend.

    Endpoints, relative to base_url:
        POST   /tables/{table}/records/query   fetch records
        POST   /tables/{table}/records         create records
        PUT    /tables/{table}/records         update records
        POST   /tables/{table}/records/delete  delete records by RecordIds

    Mutations reply with {"success": bool, ...}; anything else is a BackendError.
    """

    FIELDS = ["Id", "title", "description", "deadline", "priority", "status", "CreatedOn"]

    def __init__(
        self,
        base_url: str,
        project_id: str,
        public_key: str,
        table: str = "task4",
        timeout: float = 15,
        page_limit: int = 100,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._table = table
        self._page_limit = page_limit
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
            headers={
                "Authorization": f"Bearer {public_key}",
                "X-Project-Id": project_id,
                "Content-Type": "application/json",
            },
        )

    @property
    def _records_path(self) -> str:
        return f"/tables/{self._table}/records"

    async def _request(self, method: str, path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        logger.debug(f"Record API request: {method} {path}")
        try:
            resp = await self._client.request(method, path, json=payload)
        except httpx.HTTPError as e:
            logger.error(f"Record API {method} {path} failed: {e}")
            raise BackendError(f"Record API unreachable: {e}") from e

        logger.debug(f"Record API response: {resp.status_code}")
        if resp.status_code >= 400:
            logger.error(f"Record API returned {resp.status_code}: {resp.text[:200]}")
            raise BackendError(
                f"Record API returned {resp.status_code}", status_code=resp.status_code
            )
        try:
            data = resp.json()
        except ValueError as e:
            raise BackendError("Record API returned invalid JSON") from e
        if not isinstance(data, dict):
            raise BackendError("Record API returned an unexpected payload")
        return data

    @staticmethod
    def _check_success(data: Dict[str, Any], action: str) -> None:
        if not data.get("success"):
            logger.error(f"Record API rejected {action}: {data}")
            raise BackendError(f"Failed to {action}")

    @staticmethod
    def _record_id(task_id: str) -> int:
        try:
            return int(task_id)
        except ValueError:
            raise NotFoundError(task_id) from None

    def build_query(self, criteria: Optional[TaskFilter] = None) -> Dict[str, Any]:
        """Builds the fetch payload: filters, newest-first ordering and paging."""
        where = []
        if criteria is not None:
            if criteria.status:
                where.append({"fieldName": "status", "operator": "ExactMatch",
                              "values": [criteria.status.value]})
            if criteria.priority:
                where.append({"fieldName": "priority", "operator": "ExactMatch",
                              "values": [criteria.priority.value]})
            search = (criteria.search or "").strip()
            if search:
                where.append({"fieldName": "title", "operator": "Contains", "values": [search]})

        return {
            "Fields": [{"Field": {"Name": name}} for name in self.FIELDS],
            "orderBy": [{"field": "CreatedOn", "direction": "DESC"}],
            "where": where,
            "pagingInfo": {"limit": self._page_limit, "offset": 0},
        }

    async def fetch(self, criteria: Optional[TaskFilter] = None) -> List[Task]:
        data = await self._request("POST", f"{self._records_path}/query", self.build_query(criteria))
        return normalize_records(data.get("data") or [])

    async def create(self, task: Task) -> Task:
        record = {
            "title": task.title,
            "description": task.description,
            "deadline": task.deadline.isoformat() if task.deadline else None,
            "priority": task.priority.value,
            "status": TaskStatus.pending.value,
        }
        data = await self._request("POST", self._records_path, {"records": [record]})
        self._check_success(data, "create task")
        try:
            created = data["results"][0]["data"]
        except (KeyError, IndexError, TypeError) as e:
            raise BackendError("Record API returned no created record") from e
        return normalize_record(created)

    async def update_status(self, task_id: str, status: TaskStatus) -> None:
        payload = {"records": [{"Id": self._record_id(task_id), "status": status.value}]}
        data = await self._request("PUT", self._records_path, payload)
        self._check_success(data, "update task status")

    async def delete(self, task_id: str) -> None:
        payload = {"RecordIds": [self._record_id(task_id)]}
        data = await self._request("POST", f"{self._records_path}/delete", payload)
        self._check_success(data, "delete task")

    async def close(self) -> None:
        await self._client.aclose()
