"""EventBus core.

Lightweight synchronous publish/subscribe mechanism through which the grid
view model announces state changes (recomputed view, selection, export).

Goals:
 - Decouple the view model from whatever renders it
 - Provide minimal, testable surface (no Qt dependency)
 - Safe error isolation: one failing handler doesn't break the publish cycle
 - Allow one-shot (once) subscriptions
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum
from threading import RLock
from time import perf_counter
from typing import Any, Deque, Dict, List, Protocol

__all__ = [
    "GridEvent",
    "Event",
    "EventBus",
    "EventHandler",
    "Subscription",
]

_logger = logging.getLogger(__name__)

MAX_RECORDED_ERRORS = 100


class GridEvent(str, Enum):  # Using str subclass for easier JSON/UI usage
    VIEW_CHANGED = "view_changed"
    DATA_CHANGED = "data_changed"
    SELECTION_CHANGED = "selection_changed"
    EXPORT_COMPLETED = "export_completed"
    EXPORT_FAILED = "export_failed"


@dataclass
class Event:
    name: str  # matches GridEvent value or custom string
    payload: Any
    timestamp: float


class EventHandler(Protocol):  # noqa: D401 - protocol signature docs implicit
    def __call__(self, event: Event) -> None: ...  # pragma: no cover - structural


@dataclass(eq=False)
class Subscription:
    event: str
    handler: EventHandler
    once: bool
    active: bool = True

    def cancel(self) -> None:
        self.active = False


def _key(name: str | GridEvent) -> str:
    return name.value if isinstance(name, GridEvent) else name


class EventBus:
    """Synchronous event dispatcher.

    Handlers are invoked while the lock is NOT held (copy-first strategy) so
    handlers can subscribe/unsubscribe recursively without deadlock. Handler
    exceptions are logged and the most recent ones kept in ``errors`` rather
    than propagated.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._subs: Dict[str, List[Subscription]] = {}
        self._errors: Deque[tuple[Event, BaseException]] = deque(maxlen=MAX_RECORDED_ERRORS)

    # Subscription management -----------------------------------------
    def subscribe(
        self, name: str | GridEvent, handler: EventHandler, *, once: bool = False
    ) -> Subscription:
        sub = Subscription(event=_key(name), handler=handler, once=once)
        with self._lock:
            self._subs.setdefault(sub.event, []).append(sub)
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        with self._lock:
            bucket = self._subs.get(sub.event)
            if bucket and sub in bucket:
                bucket.remove(sub)
                if not bucket:
                    self._subs.pop(sub.event, None)
        sub.active = False

    def clear(self) -> None:
        with self._lock:
            self._subs.clear()
            self._errors.clear()

    # Publishing -------------------------------------------------------
    def publish(self, name: str | GridEvent, payload: Any = None) -> Event:
        key = _key(name)
        evt = Event(name=key, payload=payload, timestamp=perf_counter())
        with self._lock:
            subs = list(self._subs.get(key, ()))
        finished: List[Subscription] = []
        for sub in subs:
            if not sub.active:
                continue
            try:
                sub.handler(evt)
            except Exception as exc:  # noqa: BLE001 - capture any handler failure
                _logger.exception("Handler for %s failed", key)
                with self._lock:
                    self._errors.append((evt, exc))
            else:
                if sub.once:
                    finished.append(sub)
        for sub in finished:
            self.unsubscribe(sub)
        return evt

    # Introspection ----------------------------------------------------
    def subscriber_count(self, name: str | GridEvent) -> int:
        with self._lock:
            return len(self._subs.get(_key(name), ()))

    @property
    def errors(self) -> list[tuple[Event, BaseException]]:
        with self._lock:
            return list(self._errors)
