"""Build API response models from engine objects."""

from __future__ import annotations

from lingualearn.core.catalog import Exercise, Lesson
from lingualearn.core.engine import ProgressEngine
from lingualearn.core.notifications import Notification
from lingualearn.core.progress import User, VocabularyEntry
from lingualearn.web.schemas import (
    ExerciseResponse,
    LanguageProgressResponse,
    LessonResponse,
    LessonSummaryResponse,
    NotificationResponse,
    SessionStateResponse,
    SettingsResponse,
    UserResponse,
    VocabularyEntryResponse,
)


def exercise_response(exercise: Exercise) -> ExerciseResponse:
    # correct_answer stays server-side
    return ExerciseResponse(
        id=exercise.id,
        type=exercise.type.value,
        prompt=exercise.prompt,
        options=exercise.options,
        completed=exercise.completed,
    )


def lesson_summary(lesson: Lesson) -> LessonSummaryResponse:
    return LessonSummaryResponse(**lesson.to_dict(include_exercises=False))


def lesson_response(lesson: Lesson) -> LessonResponse:
    return LessonResponse(
        **lesson.to_dict(include_exercises=False),
        exercises=[exercise_response(ex) for ex in lesson.exercises],
    )


def vocabulary_entry_response(index: int, entry: VocabularyEntry) -> VocabularyEntryResponse:
    return VocabularyEntryResponse(index=index, **entry.to_dict())


def user_response(user: User, level_step: int) -> UserResponse:
    return UserResponse(
        username=user.username,
        email=user.email,
        selected_language=user.selected_language,
        streak=user.streak,
        last_login=user.last_login,
        settings=SettingsResponse(**user.settings.to_dict()),
        progress={
            language: LanguageProgressResponse(
                level=prog.level,
                xp=prog.xp,
                xp_to_next_level=prog.xp_to_next_level(level_step),
                completed_lessons=list(prog.completed_lessons),
                vocabulary_size=len(prog.vocabulary),
            )
            for language, prog in user.progress.items()
        },
    )


def notification_response(notification: Notification) -> NotificationResponse:
    return NotificationResponse(**notification.to_dict())


def session_state(engine: ProgressEngine) -> SessionStateResponse:
    """Snapshot the engine for the view layer."""
    lesson = engine.current_lesson
    exercise = engine.current_exercise
    return SessionStateResponse(
        screen=engine.screen,
        current_language=engine.current_language,
        current_lesson=lesson_response(lesson) if lesson else None,
        current_exercise=exercise_response(exercise) if exercise else None,
        user=user_response(engine.user, engine.rules.level_step_xp) if engine.user else None,
        notifications=[notification_response(n) for n in engine.notifications.queue],
    )
