from __future__ import annotations

import threading
import time
from collections import deque
from typing import Any

DEFAULT_MAX_EVENTS = 10_000


class EventLog:
    """
    Bounded in-process event log.

    Oldest events are dropped once ``max_events`` is reached. Safe to call
    from concurrent request threads.
    """

    def __init__(self, max_events: int = DEFAULT_MAX_EVENTS):
        self._events: deque[dict[str, Any]] = deque(maxlen=max_events)
        self._lock = threading.Lock()

    def record(self, event_type: str, data: dict[str, Any]) -> None:
        with self._lock:
            self._events.append({
                "type": event_type,
                "timestamp": time.time(),
                **data,
            })

    def get(self, event_type: str | None = None) -> list[dict[str, Any]]:
        with self._lock:
            if event_type is None:
                return list(self._events)
            return [e for e in self._events if e["type"] == event_type]

    def clear(self) -> None:
        with self._lock:
            self._events.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)
