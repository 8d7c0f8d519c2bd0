# -*- coding: utf-8 -*-

"""
User preferences store.

Holds the light/dark theme choice with JSON file persistence.
"""

import json
from enum import Enum
from pathlib import Path

from loguru import logger


class Theme(str, Enum):
    light = "light"
    dark = "dark"


class PreferencesStore:
    """Theme preference with JSON persistence."""

    def __init__(self, storage_path: str = "preferences.json"):
        self._storage_path = Path(storage_path)
        self._theme = Theme.light
        self._load()

    def _load(self) -> None:
        """Load the saved theme; anything missing or unknown falls back to light."""
        if not self._storage_path.exists():
            return
        try:
            data = json.loads(self._storage_path.read_text(encoding="utf-8"))
            self._theme = Theme(data.get("theme", Theme.light.value))
        except Exception as e:
            logger.warning(f"Failed to load preferences from {self._storage_path}: {e}")

    def _save(self) -> None:
        """Persist preferences (best-effort)."""
        try:
            self._storage_path.write_text(
                json.dumps({"theme": self._theme.value}, indent=2), encoding="utf-8"
            )
        except OSError as e:
            logger.error(f"Failed to save preferences: {e}")

    @property
    def theme(self) -> Theme:
        return self._theme

    def set_theme(self, theme: Theme) -> Theme:
        self._theme = theme
        self._save()
        logger.info(f"Theme set to {theme.value}")
        return self._theme

    def toggle_theme(self) -> Theme:
        return self.set_theme(Theme.light if self._theme == Theme.dark else Theme.dark)
