from __future__ import annotations

import pytest

from taskmaster.errors import ValidationError
from taskmaster.models_tasks import TaskForm
from taskmaster.validation import ensure_valid_task_form, parse_deadline, validate_task_form


def test_valid_form_has_no_errors() -> None:
    form = TaskForm(title="Buy milk", description="2 litres", deadline="2026-10-20", priority="high")
    assert validate_task_form(form) == {}


@pytest.mark.parametrize("title", ["", "   ", "\t\n"])
def test_blank_title_is_required(title: str) -> None:
    assert validate_task_form(TaskForm(title=title)) == {"title": "Title is required"}


def test_title_length_counts_after_trimming() -> None:
    assert validate_task_form(TaskForm(title="  " + "a" * 100 + "  ")) == {}
    errors = validate_task_form(TaskForm(title="a" * 101))
    assert errors == {"title": "Title must be less than 100 characters"}


def test_description_limit() -> None:
    assert validate_task_form(TaskForm(title="t", description="d" * 500)) == {}
    errors = validate_task_form(TaskForm(title="t", description=" " + "d" * 501))
    assert errors == {"description": "Description must be less than 500 characters"}


def test_all_errors_are_collected() -> None:
    form = TaskForm(title="", description="d" * 501, priority="urgent", deadline="next week")
    errors = validate_task_form(form)
    assert set(errors) == {"title", "description", "priority", "deadline"}


def test_past_deadline_is_accepted() -> None:
    assert validate_task_form(TaskForm(title="t", deadline="2000-01-01")) == {}


def test_empty_optional_fields_are_accepted() -> None:
    assert validate_task_form(TaskForm(title="t", deadline="", priority="")) == {}


def test_parse_deadline() -> None:
    assert parse_deadline(None) is None
    assert parse_deadline("  ") is None
    assert parse_deadline("2026-10-19").isoformat() == "2026-10-19"
    with pytest.raises(ValueError):
        parse_deadline("19/10/2026")


def test_ensure_valid_raises_with_field_errors() -> None:
    with pytest.raises(ValidationError) as exc:
        ensure_valid_task_form(TaskForm(title="x" * 150))
    assert exc.value.errors == {"title": "Title must be less than 100 characters"}


def test_lengths_count_code_points() -> None:
    assert validate_task_form(TaskForm(title="\U0001F600" * 100)) == {}
    errors = validate_task_form(TaskForm(title="\U0001F600" * 101))
    assert errors == {"title": "Title must be less than 100 characters"}
