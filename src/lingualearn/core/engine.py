"""Progress engine: every learner-facing operation.

Responsibilities:
- Register, log in and resume the single learner
- Select languages, start lessons and grade exercises
- Award XP, apply level-ups and record lesson completion
- Maintain the vocabulary list and its review schedule
- Drive the session navigator and report outcomes as notifications

Each operation runs synchronously and fully mutates state before
returning. Failures never propagate: they become an error notification,
leave state untouched and the operation returns False or None. The user
record is persisted after every change.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Callable

import structlog

from lingualearn.config.app_config import AppConfig, load_app_config
from lingualearn.config.languages import list_language_names
from lingualearn.core.catalog import (
    Catalog,
    Exercise,
    Lesson,
    find_lesson,
    generate_catalog,
    grade_answer,
    iter_lessons,
)
from lingualearn.core.navigator import (
    LANGUAGE_SCREENS,
    LESSON_FLOW_SCREENS,
    PUBLIC_SCREENS,
    Screen,
    SessionNavigator,
)
from lingualearn.core.notifications import Notification, NotificationQueue, Severity
from lingualearn.core.progress import (
    LanguageProgress,
    ProgressStore,
    User,
    UserSettings,
    VocabularyEntry,
)
from lingualearn.core.storage import JsonFileStorage
from lingualearn.core.streak import StreakChange, update_streak
from lingualearn.core.vocabulary import due_entries, review_entry
from lingualearn.utils.validators import (
    AuthenticationError,
    InvalidLanguageError,
    LearnerError,
    LessonNotFoundError,
    NavigationError,
    NoLanguageSelectedError,
    NotSignedInError,
    VocabularyEntryNotFoundError,
    parse_lesson_id,
)

logger = structlog.get_logger(__name__)


class ProgressEngine:
    """Owns the learner session: store, catalog, navigator and notifications.

    All state is reached through this object; nothing is ambient.
    """

    def __init__(
        self,
        store: ProgressStore,
        notifications: NotificationQueue | None = None,
        catalog: Catalog | None = None,
        config: AppConfig | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        config = config or load_app_config()
        self.store = store
        self.catalog: Catalog = catalog if catalog is not None else generate_catalog(list_language_names())
        self.notifications = notifications or NotificationQueue(
            ttl_seconds=config.notifications.ttl_seconds
        )
        self.navigator = SessionNavigator()
        self.rules = config.rules
        self.user_defaults = config.user_defaults
        self._clock = clock or datetime.now

    @classmethod
    def from_config(
        cls,
        config: AppConfig | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> ProgressEngine:
        """Build an engine persisting to the configured state directory."""
        config = config or load_app_config()
        store = ProgressStore(JsonFileStorage(config.storage.state_dir), key=config.storage.key)
        return cls(store=store, config=config, clock=clock)

    # -------------------------------------------------------------------------
    # Read-only views
    # -------------------------------------------------------------------------

    @property
    def user(self) -> User | None:
        return self.store.user

    @property
    def languages(self) -> list[str]:
        return list(self.catalog.keys())

    @property
    def screen(self) -> Screen:
        return self.navigator.screen

    @property
    def current_language(self) -> str | None:
        return self.navigator.current_language

    @property
    def current_lesson(self) -> Lesson | None:
        return self.navigator.current_lesson

    @property
    def current_exercise(self) -> Exercise | None:
        return self.navigator.current_exercise

    @property
    def current_progress(self) -> LanguageProgress | None:
        """Progress for the current language, if any."""
        if self.user is None or self.current_language is None:
            return None
        return self.user.get_progress(self.current_language)

    def lessons_for(self, language: str) -> dict[str, list[Lesson]]:
        """Catalog slice for one language (empty if unknown)."""
        return self.catalog.get(language, {})

    def notify(self, message: str, severity: Severity | str = Severity.INFO) -> Notification:
        return self.notifications.push(message, severity)

    # -------------------------------------------------------------------------
    # Internal helpers
    # -------------------------------------------------------------------------

    def _now(self) -> datetime:
        return self._clock()

    def _fail(self, error: LearnerError, operation: str) -> None:
        """Report a recoverable failure to the learner."""
        logger.warning(
            "operation_failed",
            operation=operation,
            error_type=type(error).__name__,
            message=str(error),
        )
        self.notify(str(error), Severity.ERROR)

    def _persist(self) -> None:
        self.store.save()

    def _require_user(self) -> User:
        if not self.store.is_authenticated:
            raise NotSignedInError()
        return self.store.user

    def _require_progress(self) -> tuple[str, LanguageProgress]:
        user = self._require_user()
        language = self.navigator.current_language
        if language is None:
            raise NoLanguageSelectedError()
        progress, _ = user.ensure_progress(language)
        return language, progress

    def _announce_levels(self, levels: list[int]) -> None:
        for level in levels:
            logger.info("level_up", language=self.current_language, level=level)
            self.notify(f"Level Up! You are now level {level}", Severity.SUCCESS)

    def _sync_catalog(self, language: str) -> None:
        """Flag catalog lessons the user already completed in this language."""
        user = self.store.user
        progress = user.get_progress(language) if user else None
        if progress is None:
            return
        done = set(progress.completed_lessons)
        for lesson in iter_lessons(self.catalog, language):
            if lesson.id in done:
                lesson.completed = True

    def _refresh_streak(self, user: User) -> StreakChange:
        change = update_streak(user, self._now())
        if change is StreakChange.EXTENDED:
            self.notify(f"You're on a {user.streak} day streak!", Severity.SUCCESS)
        elif change is StreakChange.RESET:
            self.notify("New day, new streak!", Severity.INFO)
        return change

    def _restore_language(self, user: User) -> None:
        language = user.selected_language
        if language and language in self.catalog:
            self._sync_catalog(language)
            self.navigator.enter_language(language)
        else:
            self.navigator.go_to(Screen.LANGUAGE_SELECTION)

    # -------------------------------------------------------------------------
    # Account operations
    # -------------------------------------------------------------------------

    def resume(self) -> User | None:
        """Restore a persisted session at startup.

        Loads the stored user, refreshes the streak and reopens the language
        dashboard when a language was selected before. Without a stored user
        the session stays on the welcome screen.
        """
        user = self.store.load()
        if user is None:
            logger.debug("no_stored_user")
            return None

        self._refresh_streak(user)
        if user.selected_language and user.selected_language in self.catalog:
            self._restore_language(user)
        self._persist()
        logger.info("session_resumed", username=user.username, streak=user.streak)
        return user

    def register_user(self, username: str, password: str, email: str) -> User:
        """Create a fresh user record and move to language selection.

        The password is accepted for interface parity and never stored.
        """
        defaults = self.user_defaults
        user = User(
            username=username,
            email=email,
            last_login=self._now(),
            settings=UserSettings(
                daily_goal=defaults.daily_goal,
                notifications=defaults.notifications,
                dark_mode=defaults.dark_mode,
            ),
        )
        self.store.save(user)
        self.notify(f"Welcome, {username}!")
        self.navigator.go_to(Screen.LANGUAGE_SELECTION)
        logger.info("user_registered", username=username)
        return user

    def login_user(self, username: str, password: str) -> bool:
        """Sign in by matching the stored username (presence check only)."""
        try:
            user = self.store.user or self.store.load()
            if user is None or user.username != username:
                raise AuthenticationError(username)
        except AuthenticationError as e:
            self._fail(e, "login_user")
            return False

        self._refresh_streak(user)
        self.notify(f"Welcome back, {username}!")
        self._restore_language(user)
        self._persist()
        logger.info("user_logged_in", username=username, streak=user.streak)
        return True

    def logout(self) -> None:
        """Drop the in-memory user and return to the welcome screen."""
        if self.store.user is not None:
            logger.info("user_logged_out", username=self.store.user.username)
        self.store.clear()
        self.navigator.reset()

    def update_settings(
        self,
        daily_goal: int | None = None,
        notifications: bool | None = None,
        dark_mode: bool | None = None,
    ) -> UserSettings | None:
        """Change user preferences; omitted fields keep their value."""
        try:
            user = self._require_user()
        except LearnerError as e:
            self._fail(e, "update_settings")
            return None

        if daily_goal is not None:
            user.settings.daily_goal = daily_goal
        if notifications is not None:
            user.settings.notifications = notifications
        if dark_mode is not None:
            user.settings.dark_mode = dark_mode

        self._persist()
        self.notify("Settings saved", Severity.SUCCESS)
        return user.settings

    # -------------------------------------------------------------------------
    # Learning flow
    # -------------------------------------------------------------------------

    def select_language(self, language: str) -> bool:
        """Make a catalog language active, creating its progress on first visit."""
        try:
            user = self._require_user()
            if language not in self.catalog:
                raise InvalidLanguageError(language)
        except LearnerError as e:
            self._fail(e, "select_language")
            return False

        user.selected_language = language
        self.store.init_progress(language)
        self._sync_catalog(language)
        self.navigator.enter_language(language)
        self.notify(f"You've selected {language}!")
        self._persist()
        logger.info("language_selected", language=language)
        return True

    def start_lesson(self, category: str, lesson_id: str) -> Lesson | None:
        """Open a lesson of the current language at its first exercise."""
        try:
            self._require_user()
            language = self.navigator.current_language
            if language is None:
                raise NoLanguageSelectedError()
            lesson = find_lesson(self.catalog, language, category, lesson_id)
            if lesson is None:
                raise LessonNotFoundError(lesson_id, category)
        except LearnerError as e:
            self._fail(e, "start_lesson")
            return None

        self.navigator.enter_lesson(lesson)
        self.notify(f"Starting lesson: {lesson.title}")
        logger.info("lesson_started", lesson_id=lesson.id)
        return lesson

    def complete_exercise(self, exercise_id: str, is_correct: bool) -> bool:
        """Record an exercise result and move the session on.

        The exercise is marked completed whatever the result. A correct
        answer earns XP. When every exercise of the lesson is completed the
        lesson is completed too. The session then points at the next
        exercise, or shows the lesson-complete screen after the last one.

        Returns:
            False (and changes nothing) if no exercise is active or the
            exercise is not part of the active lesson
        """
        lesson = self.navigator.current_lesson
        user = self.store.user
        language = self.navigator.current_language
        if lesson is None or user is None or language is None:
            logger.debug("exercise_ignored_no_lesson", exercise_id=exercise_id)
            return False
        if self.navigator.screen is not Screen.LESSON or self.navigator.current_exercise is None:
            logger.debug("exercise_ignored_lesson_finished", exercise_id=exercise_id, lesson_id=lesson.id)
            return False

        index = lesson.exercise_index(exercise_id)
        if index == -1:
            logger.debug("exercise_ignored_not_in_lesson", exercise_id=exercise_id, lesson_id=lesson.id)
            return False

        lesson.exercises[index].completed = True
        progress, _ = user.ensure_progress(language)

        if is_correct:
            xp_gained = self.rules.exercise_xp
            levels = progress.award_xp(xp_gained, self.rules.level_step_xp)
            self.notify(f"Correct! +{xp_gained}XP", Severity.SUCCESS)
            self._announce_levels(levels)
        else:
            self.notify("Not quite right. Try again!", Severity.WARNING)

        logger.info(
            "exercise_completed",
            exercise_id=exercise_id,
            is_correct=is_correct,
            xp=progress.xp,
        )

        if lesson.all_exercises_completed:
            self.complete_lesson(lesson.id)

        if index < len(lesson.exercises) - 1:
            self.navigator.advance_to(lesson.exercises[index + 1])
        else:
            self.navigator.finish_lesson()

        self._persist()
        return True

    def submit_answer(self, exercise_id: str, answer: int | str | None) -> bool | None:
        """Grade a raw answer and complete the exercise with the result.

        Returns:
            Whether the answer was correct, or None if the exercise was not
            accepted (see complete_exercise)
        """
        lesson = self.navigator.current_lesson
        if lesson is None:
            return None
        index = lesson.exercise_index(exercise_id)
        if index == -1:
            return None

        is_correct = grade_answer(lesson.exercises[index], answer)
        if not self.complete_exercise(exercise_id, is_correct):
            return None
        return is_correct

    def complete_lesson(self, lesson_id: str) -> bool:
        """Record a lesson as completed and pay the completion bonus once.

        Returns:
            True if this call recorded the completion, False if it was
            already recorded (no XP, no notification) or the lesson is unknown
        """
        try:
            language, progress = self._require_progress()
            try:
                category = parse_lesson_id(lesson_id)["category"]
            except ValueError:
                raise LessonNotFoundError(lesson_id) from None
            lesson = find_lesson(self.catalog, language, category, lesson_id)
            if lesson is None:
                raise LessonNotFoundError(lesson_id)
        except LearnerError as e:
            self._fail(e, "complete_lesson")
            return False

        lesson.completed = True

        if not progress.mark_lesson_completed(lesson_id):
            logger.debug("lesson_already_completed", lesson_id=lesson_id)
            return False

        bonus_xp = self.rules.lesson_bonus_xp
        levels = progress.award_xp(bonus_xp, self.rules.level_step_xp)
        self.notify(f"Lesson completed! +{bonus_xp}XP bonus", Severity.SUCCESS)
        self._announce_levels(levels)
        logger.info("lesson_completed", lesson_id=lesson_id, xp=progress.xp, level=progress.level)

        self._persist()
        return True

    # -------------------------------------------------------------------------
    # Vocabulary
    # -------------------------------------------------------------------------

    def add_vocabulary_word(self, word: str, translation: str, context: str = "") -> VocabularyEntry | None:
        """Append a word to the current language's vocabulary (duplicates allowed)."""
        try:
            language, progress = self._require_progress()
        except LearnerError as e:
            self._fail(e, "add_vocabulary_word")
            return None

        entry = progress.add_word(word, translation, context, now=self._now())
        self.notify(f'"{word}" added to vocabulary', Severity.SUCCESS)
        self._persist()
        logger.info("vocabulary_added", language=language, word=word, size=len(progress.vocabulary))
        return entry

    def review_vocabulary_word(self, index: int, remembered: bool) -> VocabularyEntry | None:
        """Apply a spaced-repetition review to one vocabulary entry."""
        try:
            _, progress = self._require_progress()
            if not 0 <= index < len(progress.vocabulary):
                raise VocabularyEntryNotFoundError(index)
        except LearnerError as e:
            self._fail(e, "review_vocabulary_word")
            return None

        entry = progress.vocabulary[index]
        due = review_entry(entry, remembered, self._now())
        if remembered:
            self.notify(f'"{entry.word}" mastery {entry.mastery_level}/5', Severity.SUCCESS)
        else:
            self.notify(f'Keep practicing "{entry.word}"', Severity.INFO)

        self._persist()
        logger.info(
            "vocabulary_reviewed",
            word=entry.word,
            remembered=remembered,
            mastery=entry.mastery_level,
            next_review=due.isoformat(),
        )
        return entry

    def due_vocabulary(self) -> list[tuple[int, VocabularyEntry]]:
        """Vocabulary entries of the current language that are due for review."""
        progress = self.current_progress
        if progress is None:
            return []
        return due_entries(progress.vocabulary, self._now())

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    def navigate(self, screen: Screen | str) -> bool:
        """Handle an explicit navigation request from the view layer."""
        try:
            target = Screen(screen)
            if target not in PUBLIC_SCREENS:
                self._require_user()
            if target in LANGUAGE_SCREENS and self.navigator.current_language is None:
                raise NoLanguageSelectedError()
            if target in LESSON_FLOW_SCREENS and self.navigator.current_lesson is None:
                raise NavigationError(target.value, "No lesson in progress")
            if target is Screen.LESSON and self.navigator.current_exercise is None:
                raise NavigationError(target.value, "Lesson already finished")
        except ValueError:
            self._fail(NavigationError(str(screen), f"Unknown screen {screen}"), "navigate")
            return False
        except LearnerError as e:
            self._fail(e, "navigate")
            return False

        self.navigator.go_to(target)
        return True

    # -------------------------------------------------------------------------
    # Snapshots
    # -------------------------------------------------------------------------

    def dashboard(self) -> dict[str, Any] | None:
        """Summary of the current language for the dashboard screen."""
        user = self.store.user
        progress = self.current_progress
        language = self.current_language
        if user is None or progress is None or language is None:
            return None

        return {
            "language": language,
            "level": progress.level,
            "xp": progress.xp,
            "xp_to_next_level": progress.xp_to_next_level(self.rules.level_step_xp),
            "streak": user.streak,
            "completed_lessons": len(progress.completed_lessons),
            "vocabulary_size": len(progress.vocabulary),
            "categories": {
                category: [lesson.to_dict(include_exercises=False) for lesson in lessons]
                for category, lessons in self.lessons_for(language).items()
            },
        }

    def state(self) -> dict[str, Any]:
        """Everything a view needs to re-render."""
        return {
            **self.navigator.to_dict(),
            "user": self.user.to_dict() if self.user else None,
            "notifications": [n.to_dict() for n in self.notifications.queue],
        }
