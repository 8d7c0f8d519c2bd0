# -*- coding: utf-8 -*-

# TaskMaster
# Copyright (C) 2025 TaskMaster contributors
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program. If not, see <https://www.gnu.org/licenses/>.

"""
TaskMaster application entrypoint.

Builds the FastAPI app, owns the task store lifecycle (loaded at startup,
closed at shutdown) and runs the server with uvicorn.
"""

import argparse
import sys
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from loguru import logger

from taskmaster import config
from taskmaster.backends import LocalJsonBackend, RemoteRecordBackend, TaskBackend
from taskmaster.routes_prefs import router as prefs_router
from taskmaster.routes_tasks import router as tasks_router
from taskmaster.store_prefs import PreferencesStore
from taskmaster.store_tasks import TaskStore

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)


def setup_logging(level: str = config.LOG_LEVEL) -> None:
    """Replace loguru's default sink with a formatted stderr sink."""
    logger.remove()
    logger.add(sys.stderr, level=level, format=LOG_FORMAT, colorize=True)


def build_backend(kind: str = config.BACKEND) -> Optional[TaskBackend]:
    """
    Creates the persistence backend named by configuration.

    Returns:
        Backend instance, or None for the purely in-memory variant

    Raises:
        ValueError: On an unknown backend name or missing remote settings
    """
    if kind == "memory":
        return None
    if kind == "local":
        return LocalJsonBackend(config.TASKS_STORAGE_PATH)
    if kind == "remote":
        if not config.RECORD_API_URL:
            raise ValueError("RECORD_API_URL is required for the remote backend")
        return RemoteRecordBackend(
            base_url=config.RECORD_API_URL,
            project_id=config.RECORD_API_PROJECT_ID,
            public_key=config.RECORD_API_PUBLIC_KEY,
            table=config.RECORD_API_TABLE,
            timeout=config.RECORD_API_TIMEOUT,
            page_limit=config.RECORD_API_PAGE_LIMIT,
        )
    raise ValueError(f"Unknown backend: {kind}")


def create_app(
    task_store: Optional[TaskStore] = None,
    prefs_store: Optional[PreferencesStore] = None,
    api_key: Optional[str] = None,
) -> FastAPI:
    """
    Builds the FastAPI application.

    Stores not passed in are created from configuration when the app
    starts. The task store is loaded from its backend on startup and
    closed on shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        store = task_store if task_store is not None else TaskStore(build_backend())
        app.state.task_store = store
        app.state.prefs_store = (
            prefs_store if prefs_store is not None else PreferencesStore(config.PREFS_STORAGE_PATH)
        )
        app.state.api_key = config.API_KEY if api_key is None else api_key
        await store.load()
        logger.info(f"TaskMaster {config.APP_VERSION} started with {len(store)} task(s)")
        try:
            yield
        finally:
            await store.close()
            logger.info("TaskMaster stopped")

    app = FastAPI(title="TaskMaster", version=config.APP_VERSION, lifespan=lifespan)

    @app.get("/")
    async def root():
        """Health check endpoint."""
        return {
            "status": "ok",
            "message": "TaskMaster is running",
            "version": config.APP_VERSION,
        }

    @app.get("/health")
    async def health():
        return {"status": "healthy", "version": config.APP_VERSION}

    app.include_router(tasks_router)
    app.include_router(prefs_router)
    return app


def main() -> None:
    parser = argparse.ArgumentParser(description="TaskMaster task management server")
    parser.add_argument("--host", default=config.SERVER_HOST, help="Bind address")
    parser.add_argument("--port", type=int, default=config.SERVER_PORT, help="Bind port")
    parser.add_argument(
        "--backend",
        choices=("memory", "local", "remote"),
        default=config.BACKEND,
        help="Task persistence backend",
    )
    args = parser.parse_args()

    setup_logging()
    app = create_app(task_store=TaskStore(build_backend(args.backend)))
    logger.info(f"Starting TaskMaster on {args.host}:{args.port} ({args.backend} backend)")
    uvicorn.run(app, host=args.host, port=args.port, log_level=config.LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
