# -*- coding: utf-8 -*-

"""
Task filtering and statistics.

Both helpers are pure: they never mutate the collection they are given
and are recomputed from scratch on every call.
"""

from typing import List, Optional, Sequence

from taskmaster.models_tasks import Task, TaskFilter, TaskStats, TaskStatus


def filter_tasks(tasks: Sequence[Task], criteria: Optional[TaskFilter] = None) -> List[Task]:
    """
    Returns the tasks matching every set criterion, in input order.

    Search text is trimmed and matched as a case-sensitive substring of
    the title. Blank search text is ignored.
    """
    if criteria is None:
        return list(tasks)

    search = (criteria.search or "").strip()
    result = []
    for task in tasks:
        if criteria.status and task.status != criteria.status:
            continue
        if criteria.priority and task.priority != criteria.priority:
            continue
        if search and search not in task.title:
            continue
        result.append(task)
    return result


def compute_stats(tasks: Sequence[Task]) -> TaskStats:
    """Counts total, completed and pending tasks."""
    total = len(tasks)
    completed = sum(1 for t in tasks if t.status == TaskStatus.completed)
    return TaskStats(total=total, completed=completed, pending=total - completed)
