"""Tests for input validation and the error taxonomy."""

import pytest

from lingualearn.utils.validators import (
    AuthenticationError,
    InvalidLanguageError,
    LearnerError,
    LessonNotFoundError,
    NoLanguageSelectedError,
    NotSignedInError,
    ValidationError,
    parse_lesson_id,
    validate_email,
    validate_login,
    validate_registration,
)


class TestErrors:
    """Tests for error messages and hierarchy."""

    def test_all_errors_are_learner_errors(self):
        for error in (
            InvalidLanguageError("Klingon"),
            LessonNotFoundError("x"),
            AuthenticationError("bob"),
            ValidationError("email", "bad"),
        ):
            assert isinstance(error, LearnerError)

    def test_messages(self):
        assert str(InvalidLanguageError("Klingon")) == "Language Klingon not available"
        assert str(LessonNotFoundError("Spanish-Basics-9", "Basics")) == "Lesson not found"
        assert str(NotSignedInError()) == "Please log in first"
        assert str(NoLanguageSelectedError()) == "Select a language first"

    def test_specialized_errors(self):
        assert isinstance(NotSignedInError(), AuthenticationError)
        assert isinstance(NoLanguageSelectedError(), InvalidLanguageError)


class TestValidateEmail:
    """Tests for validate_email."""

    @pytest.mark.parametrize("email", ["ana@example.com", "a.b+c@mail.co.uk"])
    def test_valid(self, email):
        assert validate_email(email)

    @pytest.mark.parametrize("email", ["", "ana", "ana@", "@example.com", "ana@example"])
    def test_invalid(self, email):
        assert not validate_email(email)


class TestValidateRegistration:
    """Tests for validate_registration."""

    def test_valid_form(self):
        validate_registration("ana", "ana@example.com", "pw", "pw")

    def test_missing_username(self):
        with pytest.raises(ValidationError) as exc:
            validate_registration("", "ana@example.com", "pw")
        assert exc.value.field == "username"
        assert exc.value.message == "Username is required"

    def test_bad_email(self):
        with pytest.raises(ValidationError, match="Invalid email format"):
            validate_registration("ana", "not-an-email", "pw")

    def test_password_mismatch(self):
        with pytest.raises(ValidationError, match="Passwords don't match"):
            validate_registration("ana", "ana@example.com", "pw", "other")

    def test_login_requires_password(self):
        with pytest.raises(ValidationError, match="Password is required"):
            validate_login("ana", "  ")


class TestParseLessonId:
    """Tests for parse_lesson_id."""

    def test_lesson_id(self):
        assert parse_lesson_id("Spanish-Basics-2") == {
            "language": "Spanish",
            "category": "Basics",
            "lesson": 2,
        }

    def test_exercise_id(self):
        parsed = parse_lesson_id("French-Food-5-ex-3")
        assert parsed["lesson"] == 5
        assert parsed["exercise"] == 3

    def test_malformed(self):
        with pytest.raises(ValueError):
            parse_lesson_id("nonsense")
