from __future__ import annotations

from pathlib import Path

from fastapi.testclient import TestClient

from taskmaster.store_prefs import PreferencesStore, Theme


def test_theme_defaults_to_light(prefs: PreferencesStore) -> None:
    assert prefs.theme == Theme.light


def test_toggle_persists(tmp_path: Path) -> None:
    path = tmp_path / "preferences.json"
    prefs = PreferencesStore(str(path))

    assert prefs.toggle_theme() == Theme.dark
    assert PreferencesStore(str(path)).theme == Theme.dark
    assert prefs.toggle_theme() == Theme.light


def test_corrupt_file_falls_back_to_light(tmp_path: Path) -> None:
    path = tmp_path / "preferences.json"
    path.write_text('{"theme": "sepia"}', encoding="utf-8")
    assert PreferencesStore(str(path)).theme == Theme.light


def test_theme_routes(client: TestClient) -> None:
    assert client.get("/v1/preferences/theme").json() == {"theme": "light"}
    assert client.put("/v1/preferences/theme", json={"theme": "dark"}).json() == {"theme": "dark"}
    assert client.post("/v1/preferences/theme/toggle").json() == {"theme": "light"}
    assert client.put("/v1/preferences/theme", json={"theme": "blue"}).status_code == 422
