# -*- coding: utf-8 -*-

"""
TaskMaster - task management service.

Task records, an ordered in-memory store with pluggable persistence,
filtering/statistics helpers, and a FastAPI JSON API.
"""

from taskmaster.config import APP_VERSION

__version__ = APP_VERSION
