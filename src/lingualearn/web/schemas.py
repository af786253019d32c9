"""Pydantic schemas for the Web API.

Serialization models for users, the catalog, session state and notifications.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from lingualearn.core.navigator import Screen


# =============================================================================
# AUTH SCHEMAS
# =============================================================================


class RegisterRequest(BaseModel):
    """Request body for creating the learner account."""

    username: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=1, max_length=200)
    password: str = Field(..., min_length=1, max_length=200)
    confirm_password: str | None = Field(default=None, max_length=200)


class LoginRequest(BaseModel):
    """Request body for logging in."""

    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1, max_length=200)


class SettingsUpdate(BaseModel):
    """Partial update of user settings."""

    daily_goal: int | None = Field(default=None, ge=1, le=240)
    notifications: bool | None = None
    dark_mode: bool | None = None


# =============================================================================
# USER SCHEMAS
# =============================================================================


class VocabularyEntryResponse(BaseModel):
    """One saved word."""

    index: int
    word: str
    translation: str
    context: str
    date_added: datetime
    review_dates: list[datetime] = Field(default_factory=list)
    mastery_level: int = Field(ge=0, le=5)


class LanguageProgressResponse(BaseModel):
    """Progress for one language."""

    level: int
    xp: int
    xp_to_next_level: int
    completed_lessons: list[str]
    vocabulary_size: int


class SettingsResponse(BaseModel):
    """User settings."""

    daily_goal: int
    notifications: bool
    dark_mode: bool


class UserResponse(BaseModel):
    """The learner record."""

    username: str
    email: str
    selected_language: str | None
    streak: int
    last_login: datetime
    settings: SettingsResponse
    progress: dict[str, LanguageProgressResponse] = Field(default_factory=dict)


# =============================================================================
# CATALOG SCHEMAS
# =============================================================================


class LanguageResponse(BaseModel):
    """A language offered by the catalog."""

    name: str
    flag: str = ""
    locale: str = ""


class LanguageListResponse(BaseModel):
    """Response for list of languages."""

    languages: list[LanguageResponse]
    count: int


class LanguageSelectRequest(BaseModel):
    """Request to make a language active."""

    language: str = Field(..., min_length=1, max_length=50)


class ExerciseResponse(BaseModel):
    """One exercise."""

    id: str
    type: str
    prompt: str
    options: list[str] | None = None
    completed: bool = False


class LessonSummaryResponse(BaseModel):
    """Lesson card for the dashboard."""

    id: str
    title: str
    category: str
    difficulty: str
    exercise_count: int
    completed: bool


class LessonResponse(LessonSummaryResponse):
    """Full lesson with its exercises."""

    exercises: list[ExerciseResponse] = Field(default_factory=list)


class CatalogResponse(BaseModel):
    """Lessons of one language grouped by category."""

    language: str
    categories: dict[str, list[LessonSummaryResponse]]


# =============================================================================
# LESSON FLOW SCHEMAS
# =============================================================================


class LessonStartRequest(BaseModel):
    """Request to open a lesson."""

    category: str = Field(..., min_length=1)
    lesson_id: str = Field(..., min_length=1)


class ExerciseCompleteRequest(BaseModel):
    """Report a graded exercise."""

    exercise_id: str = Field(..., min_length=1)
    is_correct: bool


class ExerciseAnswerRequest(BaseModel):
    """Submit a raw answer to be graded by the engine."""

    exercise_id: str = Field(..., min_length=1)
    answer: int | str | None = None


class ExerciseAnswerResponse(BaseModel):
    """Grading outcome plus the new session state."""

    is_correct: bool
    session: SessionStateResponse


# =============================================================================
# VOCABULARY SCHEMAS
# =============================================================================


class VocabularyAddRequest(BaseModel):
    """Request to save a word."""

    word: str = Field(..., min_length=1, max_length=200)
    translation: str = Field(..., min_length=1, max_length=200)
    context: str = Field(default="", max_length=500)


class VocabularyReviewRequest(BaseModel):
    """Result of reviewing one word."""

    remembered: bool


class VocabularyListResponse(BaseModel):
    """Vocabulary of the current language."""

    language: str
    entries: list[VocabularyEntryResponse]
    due: list[int] = Field(default_factory=list)
    count: int


# =============================================================================
# SESSION SCHEMAS
# =============================================================================


class NotificationResponse(BaseModel):
    """A transient notification."""

    id: int
    message: str
    severity: str
    created_at: str


class SessionStateResponse(BaseModel):
    """Everything a view needs to render the current screen."""

    screen: Screen
    current_language: str | None = None
    current_lesson: LessonResponse | None = None
    current_exercise: ExerciseResponse | None = None
    user: UserResponse | None = None
    notifications: list[NotificationResponse] = Field(default_factory=list)


class NavigateRequest(BaseModel):
    """Explicit navigation request."""

    screen: Screen


# =============================================================================
# HEALTH SCHEMAS
# =============================================================================


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "ok"
    version: str = "0.1.0"
    timestamp: str
    languages: int = 0


ExerciseAnswerResponse.model_rebuild()
