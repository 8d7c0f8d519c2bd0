# -*- coding: utf-8 -*-

"""
Task form validation.

Every rule is checked independently and all violations are collected,
so a form can show one message per offending field.
"""

from datetime import date
from typing import Dict, Optional

from taskmaster.errors import ValidationError
from taskmaster.models_tasks import TaskForm, TaskPriority

TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500


def parse_deadline(value: Optional[str]) -> Optional[date]:
    """
    Parses a YYYY-MM-DD deadline.

    Empty or missing values mean "no deadline".

    Raises:
        ValueError: If the text is not an ISO calendar date
    """
    if value is None or not value.strip():
        return None
    return date.fromisoformat(value.strip())


def validate_task_form(form: TaskForm) -> Dict[str, str]:
    """
    Validates candidate task fields.

    Past deadlines are accepted: the minimum date is an input affordance,
    not a rule.

    Lengths are counted in code points after trimming, so characters
    outside the Basic Multilingual Plane (emoji) count once each. A
    browser counting UTF-16 units would count them twice and reject some
    titles this accepts.

    Args:
        form: Candidate field values

    Returns:
        Mapping of field name to error message, empty if the form is valid
    """
    errors: Dict[str, str] = {}
    title = (form.title or "").strip()
    description = (form.description or "").strip()

    if not title:
        errors["title"] = "Title is required"
    if len(title) > TITLE_MAX_LENGTH:
        errors["title"] = "Title must be less than 100 characters"
    if len(description) > DESCRIPTION_MAX_LENGTH:
        errors["description"] = "Description must be less than 500 characters"

    if form.priority:
        try:
            TaskPriority(form.priority)
        except ValueError:
            errors["priority"] = "Priority must be one of high, medium, low"

    try:
        parse_deadline(form.deadline)
    except ValueError:
        errors["deadline"] = "Deadline must be a valid date"

    return errors


def ensure_valid_task_form(form: TaskForm) -> None:
    """Raises ValidationError when validate_task_form reports anything."""
    errors = validate_task_form(form)
    if errors:
        raise ValidationError(errors)
