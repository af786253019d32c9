"""Session navigator: which screen is showing and what is active on it.

The navigator holds no business rules. It is the current screen label plus
three pointers (language, lesson, exercise). Leaving the lesson flow clears
the lesson and exercise pointers; leaving the signed-in area clears all of
them. Session state is never persisted.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

import structlog

from lingualearn.core.catalog import Exercise, Lesson

logger = structlog.get_logger(__name__)


class Screen(str, Enum):
    """Every screen the view layer can render."""

    WELCOME = "welcome"
    LOGIN = "login"
    REGISTER = "register"
    LANGUAGE_SELECTION = "languageSelection"
    LANGUAGE_DASHBOARD = "languageDashboard"
    LESSON = "lesson"
    LESSON_COMPLETE = "lessonComplete"
    VOCABULARY = "vocabulary"
    PROFILE = "profile"


# Screens reachable without a signed-in user
PUBLIC_SCREENS = frozenset({Screen.WELCOME, Screen.LOGIN, Screen.REGISTER})

# Screens that belong to a running lesson
LESSON_FLOW_SCREENS = frozenset({Screen.LESSON, Screen.LESSON_COMPLETE})

# Screens that show data for the current language
LANGUAGE_SCREENS = frozenset({Screen.LANGUAGE_DASHBOARD, Screen.VOCABULARY})


@dataclass
class SessionNavigator:
    """Screen state machine for one session."""

    screen: Screen = Screen.WELCOME
    current_language: str | None = None
    current_lesson: Lesson | None = None
    current_exercise: Exercise | None = None

    def go_to(self, screen: Screen) -> None:
        """Switch screen, clearing pointers that no longer apply."""
        previous = self.screen
        self.screen = Screen(screen)

        if self.screen not in LESSON_FLOW_SCREENS:
            self.current_lesson = None
            self.current_exercise = None
        if self.screen in PUBLIC_SCREENS:
            self.current_language = None

        if previous is not self.screen:
            logger.debug("screen_changed", previous=previous.value, screen=self.screen.value)

    def enter_language(self, language: str) -> None:
        """Make a language current and show its dashboard."""
        self.current_language = language
        self.go_to(Screen.LANGUAGE_DASHBOARD)

    def enter_lesson(self, lesson: Lesson) -> None:
        """Start a lesson at its first exercise."""
        self.current_lesson = lesson
        self.current_exercise = lesson.exercises[0] if lesson.exercises else None
        self.go_to(Screen.LESSON)

    def advance_to(self, exercise: Exercise) -> None:
        """Point at the next exercise of the current lesson."""
        self.current_exercise = exercise

    def finish_lesson(self) -> None:
        """Show the lesson-complete screen; the lesson stays current for the summary."""
        self.current_exercise = None
        self.go_to(Screen.LESSON_COMPLETE)

    def reset(self) -> None:
        """Back to the welcome screen with nothing active."""
        self.go_to(Screen.WELCOME)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for API response."""
        return {
            "screen": self.screen.value,
            "current_language": self.current_language,
            "current_lesson_id": self.current_lesson.id if self.current_lesson else None,
            "current_exercise_id": self.current_exercise.id if self.current_exercise else None,
        }
