"""Self-expiring toast notifications."""

from __future__ import annotations

import itertools
import logging
import threading
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Protocol

_logger = logging.getLogger(__name__)

DEFAULT_TOAST_DURATION_MS = 3000


@dataclass(frozen=True)
class ToastEntry:
    id: int
    title: str
    description: str = ""
    duration_ms: int = DEFAULT_TOAST_DURATION_MS


class _Timer(Protocol):
    daemon: bool

    def start(self) -> None:
        ...

    def cancel(self) -> None:
        ...


TimerFactory = Callable[[float, Callable[[], None]], _Timer]
QueueListener = Callable[[List[ToastEntry]], None]


def _default_timer_factory(interval: float, callback: Callable[[], None]) -> _Timer:
    return threading.Timer(interval, callback)


class NotificationQueue:
    """Ordered queue of toasts, each removed by its own one-shot timer.

    Entries are listed oldest first. The queue has no capacity bound, so
    enqueueing faster than entries expire grows it without limit.
    """

    def __init__(
        self,
        default_duration_ms: int = DEFAULT_TOAST_DURATION_MS,
        timer_factory: Optional[TimerFactory] = None,
    ):
        self.default_duration_ms = default_duration_ms
        self._timer_factory: TimerFactory = timer_factory or _default_timer_factory
        self._lock = threading.Lock()
        self._ids = itertools.count(1)
        self._entries: List[ToastEntry] = []
        self._timers: Dict[int, _Timer] = {}
        self._listeners: List[QueueListener] = []

    def add_listener(self, listener: QueueListener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def _notify(self) -> None:
        with self._lock:
            listeners = list(self._listeners)
            snapshot = list(self._entries)
        for listener in listeners:
            try:
                listener(snapshot)
            except Exception as exc:
                _logger.exception("Toast listener failed: %s", exc)

    def enqueue(self, title: str, description: str = "", duration_ms: Optional[int] = None) -> ToastEntry:
        duration = self.default_duration_ms if duration_ms is None else int(duration_ms)
        if duration < 0:
            raise ValueError("duration_ms must not be negative")
        with self._lock:
            entry = ToastEntry(id=next(self._ids), title=title, description=description or "", duration_ms=duration)
            self._entries.append(entry)
            timer = self._timer_factory(duration / 1000.0, lambda: self.remove(entry.id))
            timer.daemon = True
            self._timers[entry.id] = timer
        timer.start()
        _logger.debug("Toast %d enqueued: %s", entry.id, title)
        self._notify()
        return entry

    def remove(self, toast_id: int) -> bool:
        """Drop the entry with ``toast_id``; returns False if it was already gone."""
        with self._lock:
            self._timers.pop(toast_id, None)
            for index, entry in enumerate(self._entries):
                if entry.id == toast_id:
                    del self._entries[index]
                    break
            else:
                return False
        _logger.debug("Toast %d expired.", toast_id)
        self._notify()
        return True

    def list(self) -> List[ToastEntry]:
        with self._lock:
            return list(self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def close(self) -> None:
        """Cancel pending timers; active entries stay until cleared."""
        with self._lock:
            timers = list(self._timers.values())
            self._timers.clear()
        for timer in timers:
            timer.cancel()


__all__ = ["DEFAULT_TOAST_DURATION_MS", "ToastEntry", "NotificationQueue"]
