# -*- coding: utf-8 -*-

"""
TaskMaster configuration.

Values are read once from the environment at import time. A local
.env file is loaded first when present.
"""

import os

from dotenv import load_dotenv

load_dotenv(override=False)

APP_VERSION = "1.0.0"

# --- Server ---
SERVER_HOST: str = os.getenv("SERVER_HOST", "0.0.0.0")
SERVER_PORT: int = int(os.getenv("SERVER_PORT", "8000"))
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# Empty key disables bearer authentication
API_KEY: str = os.getenv("TASKMASTER_API_KEY", "")

# --- Persistence ---
# memory | local | remote
BACKEND: str = os.getenv("TASKMASTER_BACKEND", "local").lower()
TASKS_STORAGE_PATH: str = os.getenv("TASKS_STORAGE_PATH", "tasks.json")
PREFS_STORAGE_PATH: str = os.getenv("PREFS_STORAGE_PATH", "preferences.json")

# --- Remote record API (backend-as-a-service) ---
RECORD_API_URL: str = os.getenv("RECORD_API_URL", "")
RECORD_API_PROJECT_ID: str = os.getenv("RECORD_API_PROJECT_ID", "")
RECORD_API_PUBLIC_KEY: str = os.getenv("RECORD_API_PUBLIC_KEY", "")
RECORD_API_TABLE: str = os.getenv("RECORD_API_TABLE", "task4")
RECORD_API_TIMEOUT: float = float(os.getenv("RECORD_API_TIMEOUT", "15"))
RECORD_API_PAGE_LIMIT = 100
