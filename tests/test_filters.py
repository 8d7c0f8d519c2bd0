from __future__ import annotations

from datetime import datetime, timezone

from taskmaster.filters import compute_stats, filter_tasks
from taskmaster.models_tasks import Task, TaskFilter, TaskPriority, TaskStatus


def _task(tid: str, title: str, priority: str = "medium", status: str = "pending") -> Task:
    return Task(
        id=tid,
        title=title,
        priority=TaskPriority(priority),
        status=TaskStatus(status),
        created_at=datetime(2026, 10, 19, tzinfo=timezone.utc),
    )


TASKS = [
    _task("1", "Buy milk", "high"),
    _task("2", "Write report", "low", "completed"),
    _task("3", "buy bread", "high", "completed"),
    _task("4", "Call Bob", "medium"),
]


def test_no_criteria_returns_input_unchanged() -> None:
    assert filter_tasks(TASKS) == TASKS
    assert filter_tasks(TASKS, TaskFilter()) == TASKS


def test_status_filter() -> None:
    result = filter_tasks(TASKS, TaskFilter(status=TaskStatus.completed))
    assert [t.id for t in result] == ["2", "3"]


def test_priority_filter() -> None:
    result = filter_tasks(TASKS, TaskFilter(priority=TaskPriority.high))
    assert [t.id for t in result] == ["1", "3"]


def test_search_is_case_sensitive_and_trimmed() -> None:
    assert [t.id for t in filter_tasks(TASKS, TaskFilter(search="  Buy "))] == ["1"]
    assert [t.id for t in filter_tasks(TASKS, TaskFilter(search="buy"))] == ["3"]


def test_blank_search_is_ignored() -> None:
    assert filter_tasks(TASKS, TaskFilter(search="   ")) == TASKS


def test_criteria_combine_with_and() -> None:
    criteria = TaskFilter(status=TaskStatus.completed, priority=TaskPriority.high, search="bread")
    assert [t.id for t in filter_tasks(TASKS, criteria)] == ["3"]
    criteria = TaskFilter(status=TaskStatus.pending, priority=TaskPriority.low)
    assert filter_tasks(TASKS, criteria) == []


def test_filter_does_not_mutate_input() -> None:
    tasks = list(TASKS)
    filter_tasks(tasks, TaskFilter(status=TaskStatus.pending))
    assert tasks == TASKS


def test_stats() -> None:
    stats = compute_stats(TASKS)
    assert (stats.total, stats.completed, stats.pending) == (4, 2, 2)
    assert stats.completed + stats.pending == stats.total


def test_stats_empty() -> None:
    stats = compute_stats([])
    assert (stats.total, stats.completed, stats.pending) == (0, 0, 0)
