"""Logging service.

Captures recent records from the ``datagrid`` logger hierarchy into a ring
buffer so a host can surface grid warnings (bad input, unsupported export
format) in its own UI without parsing log files.

Design goals:
 - Headless testability (no Qt dependency here)
 - Filtering by level name or logger name substring
 - Capacity-bound ring buffer with O(1) append
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from threading import RLock
from typing import Deque, List, Optional

from datagrid.settings import LOG_CAPACITY

__all__ = ["LogEntry", "LoggingService"]

GRID_LOGGER = "datagrid"


@dataclass(frozen=True)
class LogEntry:
    level: str
    name: str
    message: str
    created: float


class _RingBufferHandler(logging.Handler):
    def __init__(self, svc: "LoggingService") -> None:
        super().__init__()
        self._svc = svc

    def emit(self, record: logging.LogRecord) -> None:  # noqa: D401
        self._svc._ingest_record(record)


class LoggingService:
    def __init__(self, capacity: int = LOG_CAPACITY, *, logger_name: str = GRID_LOGGER) -> None:
        self._logger = logging.getLogger(logger_name)
        self._lock = RLock()
        self._entries: Deque[LogEntry] = deque(maxlen=capacity)
        self._handler = _RingBufferHandler(self)
        self._handler.setLevel(logging.DEBUG)
        self._attached = False

    # Lifecycle --------------------------------------------------------
    def attach(self, level: int = logging.INFO) -> None:
        if self._attached:
            return
        self._logger.addHandler(self._handler)
        # Only lower the threshold; keep a stricter host configuration
        if self._logger.level == logging.NOTSET or self._logger.level > level:
            self._logger.setLevel(level)
        self._attached = True

    def detach(self) -> None:
        if not self._attached:
            return
        self._logger.removeHandler(self._handler)
        self._attached = False

    @property
    def attached(self) -> bool:
        return self._attached

    # Internal ingestion -----------------------------------------------
    def _ingest_record(self, record: logging.LogRecord) -> None:
        entry = LogEntry(
            level=record.levelname,
            name=record.name,
            message=record.getMessage(),
            created=record.created,
        )
        with self._lock:
            self._entries.append(entry)

    # Query ------------------------------------------------------------
    def recent(self, limit: Optional[int] = None) -> List[LogEntry]:
        with self._lock:
            data = list(self._entries)
        return data[-limit:] if limit is not None else data

    def filter(
        self, *, level: str | None = None, name_contains: str | None = None
    ) -> List[LogEntry]:
        out: List[LogEntry] = []
        for e in self.recent():
            if level and e.level != level:
                continue
            if name_contains and name_contains not in e.name:
                continue
            out.append(e)
        return out

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
