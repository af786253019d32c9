"""Engine provider for the Web API.

The engine is scoped to exactly one learner, so the process holds a single
ProgressEngine. It is created lazily and resumes any persisted session.
"""

from __future__ import annotations

import threading

import structlog

from lingualearn.core.engine import ProgressEngine

logger = structlog.get_logger(__name__)


# Global engine instance
_engine: ProgressEngine | None = None
_engine_lock = threading.Lock()


def get_engine() -> ProgressEngine:
    """Get the global engine instance, resuming the stored session on first use."""
    global _engine
    with _engine_lock:
        if _engine is None:
            _engine = ProgressEngine.from_config()
            user = _engine.resume()
            logger.info(
                "engine_created",
                resumed=user is not None,
                screen=_engine.screen.value,
            )
        return _engine


def reset_engine() -> None:
    """Reset the engine (for testing)."""
    global _engine
    with _engine_lock:
        if _engine is not None:
            _engine.notifications.clear()
        _engine = None
