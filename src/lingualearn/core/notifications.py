"""Transient user-facing notifications.

Each pushed notification gets a unique, increasing id derived from the
wall clock and is removed automatically after a fixed delay. Removal runs
on a scheduled, cancellable task and never blocks the caller.
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Protocol

import structlog

logger = structlog.get_logger(__name__)

DEFAULT_TTL_SECONDS = 5.0


class Severity(str, Enum):
    """Notification severity."""

    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Notification:
    """A message shown to the learner for a short time."""

    id: int
    message: str
    severity: Severity = Severity.INFO
    created_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for API response."""
        return {
            "id": self.id,
            "message": self.message,
            "severity": self.severity.value,
            "created_at": self.created_at,
        }


class Cancellable(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Runs a callback once after a delay."""

    def schedule(self, delay: float, callback: Callable[[], None]) -> Cancellable: ...


class TimerScheduler:
    """Scheduler backed by daemon threading.Timer objects."""

    def schedule(self, delay: float, callback: Callable[[], None]) -> threading.Timer:
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        timer.start()
        return timer


Listener = Callable[[Notification], None]


class NotificationQueue:
    """Time-limited notification list.

    Consumers read `queue`; entries leave only when their timer fires
    (or through `dismiss`, which also cancels the timer).
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        scheduler: Scheduler | None = None,
        clock: Callable[[], float] = time.time,
    ):
        self.ttl_seconds = ttl_seconds
        self._scheduler = scheduler or TimerScheduler()
        self._clock = clock
        self._items: list[Notification] = []
        self._timers: dict[int, Cancellable] = {}
        self._listeners: list[Listener] = []
        self._last_id = 0
        self._lock = threading.Lock()

    @property
    def queue(self) -> tuple[Notification, ...]:
        """Current notifications, oldest first."""
        with self._lock:
            return tuple(self._items)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def _next_id(self) -> int:
        """Millisecond timestamp, bumped to stay strictly increasing."""
        candidate = int(self._clock() * 1000)
        self._last_id = max(candidate, self._last_id + 1)
        return self._last_id

    def push(self, message: str, severity: Severity | str = Severity.INFO) -> Notification:
        """Add a notification and schedule its removal.

        Args:
            message: Text to show
            severity: info | success | warning | error

        Returns:
            The created Notification
        """
        severity = Severity(severity)
        with self._lock:
            notification = Notification(id=self._next_id(), message=message, severity=severity)
            self._items.append(notification)
            listeners = list(self._listeners)

        handle = self._scheduler.schedule(self.ttl_seconds, lambda: self._expire(notification.id))
        with self._lock:
            if any(n.id == notification.id for n in self._items):
                self._timers[notification.id] = handle

        logger.debug(
            "notification_pushed",
            notification_id=notification.id,
            severity=severity.value,
        )

        for listener in listeners:
            listener(notification)
        return notification

    def _expire(self, notification_id: int) -> None:
        """Timer callback; removing an already-removed id is a no-op."""
        with self._lock:
            self._timers.pop(notification_id, None)
            self._items = [n for n in self._items if n.id != notification_id]

    def dismiss(self, notification_id: int) -> bool:
        """Remove a notification early and cancel its timer.

        Returns:
            True if the notification was still present
        """
        with self._lock:
            handle = self._timers.pop(notification_id, None)
            before = len(self._items)
            self._items = [n for n in self._items if n.id != notification_id]
            removed = len(self._items) != before

        if handle is not None:
            handle.cancel()
        return removed

    def clear(self) -> None:
        """Drop every notification and cancel all pending timers."""
        with self._lock:
            handles = list(self._timers.values())
            self._timers.clear()
            self._items.clear()
        for handle in handles:
            handle.cancel()

    def add_listener(self, listener: Listener) -> None:
        """Call `listener` with every notification pushed from now on."""
        with self._lock:
            self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)
