"""Day-streak calculation.

Compares calendar dates (year, month, day in local time), not elapsed
hours: a login at 23:59 followed by one at 00:01 is a one-day step.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from enum import Enum

import structlog

from lingualearn.core.progress import User

logger = structlog.get_logger(__name__)


class StreakChange(Enum):
    """Outcome of a streak refresh."""

    UNCHANGED = "unchanged"  # Already visited today
    EXTENDED = "extended"  # Last visit was yesterday
    RESET = "reset"  # Gap of two or more days


def update_streak(user: User, now: datetime | None = None) -> StreakChange:
    """Refresh the user's streak for a login at `now`.

    Always stamps `last_login = now` as the final step.

    Args:
        user: User record to mutate
        now: Current local time (defaults to datetime.now())

    Returns:
        Which branch was taken
    """
    if now is None:
        now = datetime.now()

    today = now.date()
    last = user.last_login.date()
    yesterday = today - timedelta(days=1)

    if last == yesterday:
        user.streak += 1
        change = StreakChange.EXTENDED
    elif last != today:
        user.streak = 1
        change = StreakChange.RESET
    else:
        change = StreakChange.UNCHANGED

    user.last_login = now
    logger.debug("streak_updated", change=change.value, streak=user.streak)
    return change
