# -*- coding: utf-8 -*-

"""
TaskMaster error types.

None of these are fatal; routes translate them into HTTP responses.
"""

from typing import Dict, Optional


class TaskMasterError(Exception):
    """Base error for task operations."""


class ValidationError(TaskMasterError):
    """Raised when task form input breaks one or more field rules."""

    def __init__(self, errors: Dict[str, str]):
        super().__init__("Please fix the errors in the form")
        self.errors = dict(errors)


class NotFoundError(TaskMasterError):
    """Raised when an operation targets an unknown task id."""

    def __init__(self, task_id: str):
        super().__init__(f"Task not found: {task_id}")
        self.task_id = task_id


class BackendError(TaskMasterError):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
