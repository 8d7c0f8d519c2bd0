# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from taskmaster.main import create_app
from taskmaster.store_prefs import PreferencesStore
from taskmaster.store_tasks import TaskStore


@pytest.fixture()
def store() -> TaskStore:
    """Purely in-memory store, no backend."""
    return TaskStore()


@pytest.fixture()
def prefs(tmp_path: Path) -> PreferencesStore:
    return PreferencesStore(str(tmp_path / "preferences.json"))


@pytest.fixture()
def client(store: TaskStore, prefs: PreferencesStore):
    app = create_app(task_store=store, prefs_store=prefs, api_key="")
    with TestClient(app) as c:
        yield c
