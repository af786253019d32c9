"""Content generator for the lesson catalog.

Builds the language -> category -> lesson -> exercise tree. Generation is
deterministic: the same language list always yields the same ids, titles and
exercise kinds. Text fields are placeholders; real content can replace them
without changing structure or ids.

ID format:
- lesson:   "<language>-<category>-<n>"
- exercise: "<language>-<category>-<n>-ex-<i>"
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import structlog

logger = structlog.get_logger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

CATEGORIES = ["Basics", "Greetings", "Numbers", "Food", "Travel", "Conversation"]
LESSONS_PER_CATEGORY = 5
EXERCISES_PER_LESSON = 5

MULTIPLE_CHOICE_OPTIONS = [
    "Correct option",
    "Wrong option 1",
    "Wrong option 2",
    "Wrong option 3",
]
TRANSLATION_ANSWER = "Sample answer"


class ExerciseType(str, Enum):
    """Exercise kinds, in the order they cycle through a lesson."""

    MULTIPLE_CHOICE = "MultipleChoice"
    TRANSLATION = "Translation"
    LISTENING = "Listening"
    SPEAKING = "Speaking"
    MATCHING = "Matching"


EXERCISE_CYCLE = list(ExerciseType)


class Difficulty(str, Enum):
    """Lesson difficulty, derived from the lesson's position in its category."""

    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"

    @classmethod
    def for_lesson(cls, number: int) -> Difficulty:
        """Map a 1-based lesson number to its difficulty."""
        if number <= 2:
            return cls.BEGINNER
        if number <= 4:
            return cls.INTERMEDIATE
        return cls.ADVANCED


# =============================================================================
# DATA CLASSES
# =============================================================================


@dataclass
class Exercise:
    """One exercise inside a lesson."""

    id: str
    type: ExerciseType
    prompt: str
    options: list[str] | None = None
    correct_answer: int | str | None = None
    completed: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "type": self.type.value,
            "prompt": self.prompt,
            "options": self.options,
            "correct_answer": self.correct_answer,
            "completed": self.completed,
        }


@dataclass
class Lesson:
    """An ordered set of exercises within a category."""

    id: str
    title: str
    category: str
    difficulty: Difficulty
    exercises: list[Exercise] = field(default_factory=list)
    completed: bool = False

    def exercise_index(self, exercise_id: str) -> int:
        """Return the position of an exercise, or -1 if it is not in this lesson."""
        for i, exercise in enumerate(self.exercises):
            if exercise.id == exercise_id:
                return i
        return -1

    @property
    def all_exercises_completed(self) -> bool:
        """Whether every exercise has been marked completed."""
        return all(ex.completed for ex in self.exercises)

    def to_dict(self, include_exercises: bool = True) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "category": self.category,
            "difficulty": self.difficulty.value,
            "exercise_count": len(self.exercises),
            "completed": self.completed,
        }
        if include_exercises:
            data["exercises"] = [ex.to_dict() for ex in self.exercises]
        return data


# language -> category -> lessons
Catalog = dict[str, dict[str, list[Lesson]]]


# =============================================================================
# GENERATION
# =============================================================================


def _generate_exercises(language: str, category: str, lesson_number: int) -> list[Exercise]:
    """Generate the fixed exercise list for one lesson."""
    exercises = []
    for i in range(1, EXERCISES_PER_LESSON + 1):
        kind = EXERCISE_CYCLE[(i - 1) % len(EXERCISE_CYCLE)]

        options = None
        correct_answer: int | str | None = None
        if kind is ExerciseType.MULTIPLE_CHOICE:
            options = list(MULTIPLE_CHOICE_OPTIONS)
            correct_answer = 0
        elif kind is ExerciseType.TRANSLATION:
            correct_answer = TRANSLATION_ANSWER

        exercises.append(
            Exercise(
                id=f"{language}-{category}-{lesson_number}-ex-{i}",
                type=kind,
                prompt=f"Exercise {i} for {category} lesson {lesson_number}",
                options=options,
                correct_answer=correct_answer,
            )
        )
    return exercises


def generate_category(language: str, category: str) -> list[Lesson]:
    """Generate the lessons of one category."""
    return [
        Lesson(
            id=f"{language}-{category}-{n}",
            title=f"{category} {n}",
            category=category,
            difficulty=Difficulty.for_lesson(n),
            exercises=_generate_exercises(language, category, n),
        )
        for n in range(1, LESSONS_PER_CATEGORY + 1)
    ]


def generate_language(language: str) -> dict[str, list[Lesson]]:
    """Generate every category for one language."""
    return {category: generate_category(language, category) for category in CATEGORIES}


def generate_catalog(languages: list[str]) -> Catalog:
    """Generate the full catalog for a list of languages.

    Args:
        languages: Language names, e.g. ["Spanish", "French"]

    Returns:
        Mapping language -> category -> ordered lessons
    """
    catalog = {language: generate_language(language) for language in languages}
    logger.debug(
        "catalog_generated",
        languages=len(catalog),
        lessons=sum(len(lessons) for cats in catalog.values() for lessons in cats.values()),
    )
    return catalog


# =============================================================================
# LOOKUP AND GRADING
# =============================================================================


def find_lesson(catalog: Catalog, language: str, category: str, lesson_id: str) -> Lesson | None:
    """Find a lesson by id within one category of one language."""
    for lesson in catalog.get(language, {}).get(category, []):
        if lesson.id == lesson_id:
            return lesson
    return None


def iter_lessons(catalog: Catalog, language: str):
    """Yield every lesson of a language in category order."""
    for lessons in catalog.get(language, {}).values():
        yield from lessons


def grade_answer(exercise: Exercise, answer: int | str | None) -> bool:
    """Grade a submitted answer by literal comparison.

    - MultipleChoice: the chosen option index must equal the correct index.
    - Translation: case-insensitive string equality.
    - Listening, Speaking, Matching: any submission counts as correct.
    """
    if exercise.type is ExerciseType.MULTIPLE_CHOICE:
        if isinstance(answer, bool):
            return False
        try:
            return int(answer) == exercise.correct_answer  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return False

    if exercise.type is ExerciseType.TRANSLATION:
        if answer is None:
            return False
        return str(answer).lower() == str(exercise.correct_answer).lower()

    return True
