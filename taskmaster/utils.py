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
Utility functions for TaskMaster.

Contains id generation and date/time helpers shared by the store,
backends and routes.
"""

import re
import time
from datetime import datetime, timezone
from typing import Optional

_last_task_ms = 0

_FRACTION_RE = re.compile(r"(?<=:\d\d)\.(\d+)")


def generate_task_id() -> str:
    """
    Generates a time-based task ID.

    IDs are strictly increasing within a process even when several tasks
    are created in the same millisecond.

    Returns:
        ID in format "task-{epoch_ms}"
    """
    global _last_task_ms
    now_ms = int(time.time() * 1000)
    if now_ms <= _last_task_ms:
        now_ms = _last_task_ms + 1
    _last_task_ms = now_ms
    return f"task-{now_ms}"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """
    Parses an ISO 8601 timestamp, assuming UTC when no offset is given.

    Fractional seconds are cut or padded to microseconds, so .NET-style
    seven-digit fractions parse on every supported Python version.

    Returns:
        Aware datetime, or None if the value is empty or malformed
    """
    if not value:
        return None
    try:
        text = str(value).strip().replace("Z", "+00:00")
        text = _FRACTION_RE.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
