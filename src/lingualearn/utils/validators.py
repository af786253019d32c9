"""Error taxonomy and input validation helpers.

ID conventions:
- lesson_id: "<language>-<category>-<n>" (e.g. "Spanish-Basics-1")
- exercise_id: "<lesson_id>-ex-<i>" (e.g. "Spanish-Basics-1-ex-3")

Functions:
- validate_email(email) -> bool: Check email format
- validate_registration(...): Check sign-up form fields
- validate_login(...): Check login form fields
- parse_lesson_id(lesson_id) -> dict: Decompose a lesson or exercise ID
"""

from __future__ import annotations

import re


class LearnerError(Exception):
    """Base class for recoverable learner-facing failures."""


class InvalidLanguageError(LearnerError):
    """Raised when a language is not part of the catalog."""

    def __init__(self, language: str):
        self.language = language
        super().__init__(f"Language {language} not available")


class LessonNotFoundError(LearnerError):
    """Raised when a lesson lookup by id fails."""

    def __init__(self, lesson_id: str, category: str | None = None):
        self.lesson_id = lesson_id
        self.category = category
        super().__init__("Lesson not found")


class AuthenticationError(LearnerError):
    """Raised when login does not match the stored user."""

    def __init__(self, username: str):
        self.username = username
        super().__init__("Login failed. User not found or incorrect password.")


class NotSignedInError(AuthenticationError):
    """Raised when an operation needs a signed-in user and there is none."""

    def __init__(self):
        self.username = ""
        LearnerError.__init__(self, "Please log in first")


class NoLanguageSelectedError(InvalidLanguageError):
    """Raised when an operation needs an active language and there is none."""

    def __init__(self):
        self.language = None
        LearnerError.__init__(self, "Select a language first")


class VocabularyEntryNotFoundError(LearnerError):
    """Raised when a vocabulary index is out of range."""

    def __init__(self, index: int):
        self.index = index
        super().__init__(f"Vocabulary entry {index} not found")


class NavigationError(LearnerError):
    """Raised when a screen cannot be shown in the current session state."""

    def __init__(self, screen: str, reason: str):
        self.screen = screen
        self.reason = reason
        super().__init__(reason)


class ValidationError(LearnerError):
    """Raised when a form is missing required fields or is malformed."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(message)


# Email validation pattern
EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+$")


def validate_email(email: str) -> bool:
    """Validate email format.

    Args:
        email: Email address to validate

    Returns:
        True if the address looks valid, False otherwise
    """
    return bool(EMAIL_PATTERN.match(email or ""))


def _require(field: str, value: str | None) -> None:
    if value is None or not str(value).strip():
        raise ValidationError(field, f"{field.replace('_', ' ').capitalize()} is required")


def validate_registration(
    username: str | None,
    email: str | None,
    password: str | None,
    confirm_password: str | None = None,
) -> None:
    """Validate a sign-up form.

    Args:
        username: Desired username
        email: Contact email
        password: Password (never stored)
        confirm_password: Repeated password; skipped when None

    Raises:
        ValidationError: On the first missing or malformed field
    """
    _require("username", username)
    _require("email", email)
    _require("password", password)
    if not validate_email(email or ""):
        raise ValidationError("email", "Invalid email format")
    if confirm_password is not None and confirm_password != password:
        raise ValidationError("confirm_password", "Passwords don't match")


def validate_login(username: str | None, password: str | None) -> None:
    """Validate a login form (presence only)."""
    _require("username", username)
    _require("password", password)


def parse_lesson_id(entity_id: str) -> dict:
    """Parse a lesson or exercise ID into components.

    Examples:
        "Spanish-Basics-2" -> {"language": "Spanish", "category": "Basics", "lesson": 2}
        "Spanish-Basics-2-ex-4" -> {..., "lesson": 2, "exercise": 4}

    Args:
        entity_id: Lesson or exercise ID

    Returns:
        Dictionary with parsed components

    Raises:
        ValueError: If the ID does not follow the lesson ID convention
    """
    exercise = None
    base = entity_id
    if "-ex-" in entity_id:
        base, _, ex_part = entity_id.rpartition("-ex-")
        exercise = int(ex_part)

    language, category, number = base.rsplit("-", 2)
    result: dict = {"language": language, "category": category, "lesson": int(number)}
    if exercise is not None:
        result["exercise"] = exercise
    return result
