"""Progress store: the user record and per-language learning progress.

Responsibilities:
- Hold the single active User record (None means unauthenticated)
- Own LanguageProgress mutation (XP, levels, completed lessons, vocabulary)
- Load/save the whole record through a persistence adapter

XP never decreases and levels only go up. Reaching level L+1 from level L
needs xp >= level_step * L; xp is cumulative and never reset on level-up.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from lingualearn.core.storage import StorageAdapter

logger = structlog.get_logger(__name__)

MAX_MASTERY_LEVEL = 5
DEFAULT_LEVEL_STEP_XP = 100


def _parse_dt(value: str | None) -> datetime | None:
    if not value:
        return None
    return datetime.fromisoformat(value)


# =============================================================================
# DATA CLASSES
# =============================================================================


@dataclass
class VocabularyEntry:
    """A word saved by the learner for spaced repetition."""

    word: str
    translation: str
    context: str = ""
    date_added: datetime = field(default_factory=datetime.now)
    review_dates: list[datetime] = field(default_factory=list)
    mastery_level: int = 0  # 0-5 scale

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "word": self.word,
            "translation": self.translation,
            "context": self.context,
            "date_added": self.date_added.isoformat(),
            "review_dates": [d.isoformat() for d in self.review_dates],
            "mastery_level": self.mastery_level,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> VocabularyEntry:
        """Rebuild an entry from its serialized form."""
        return cls(
            word=data["word"],
            translation=data.get("translation", ""),
            context=data.get("context", ""),
            date_added=_parse_dt(data.get("date_added")) or datetime.now(),
            review_dates=[datetime.fromisoformat(d) for d in data.get("review_dates", [])],
            mastery_level=max(0, min(MAX_MASTERY_LEVEL, int(data.get("mastery_level", 0)))),
        )


@dataclass
class LanguageProgress:
    """Progress for one language."""

    level: int = 1
    xp: int = 0
    completed_lessons: list[str] = field(default_factory=list)
    vocabulary: list[VocabularyEntry] = field(default_factory=list)

    def award_xp(self, amount: int, level_step: int = DEFAULT_LEVEL_STEP_XP) -> list[int]:
        """Add XP and apply every level-up it unlocks.

        Args:
            amount: XP to add (negative amounts are ignored)
            level_step: XP per level multiplier

        Returns:
            The new levels reached, in order (empty if none)
        """
        if amount > 0:
            self.xp += amount

        reached = []
        while self.xp >= level_step * self.level:
            self.level += 1
            reached.append(self.level)
        return reached

    def xp_to_next_level(self, level_step: int = DEFAULT_LEVEL_STEP_XP) -> int:
        """XP still needed before the next level-up."""
        return max(0, level_step * self.level - self.xp)

    def has_completed(self, lesson_id: str) -> bool:
        """Whether a lesson has been recorded as completed."""
        return lesson_id in self.completed_lessons

    def mark_lesson_completed(self, lesson_id: str) -> bool:
        """Record a lesson completion. Returns False if it was already recorded."""
        if lesson_id in self.completed_lessons:
            return False
        self.completed_lessons.append(lesson_id)
        return True

    def add_word(
        self,
        word: str,
        translation: str,
        context: str = "",
        now: datetime | None = None,
    ) -> VocabularyEntry:
        """Append a vocabulary entry. Duplicates are kept."""
        entry = VocabularyEntry(
            word=word,
            translation=translation,
            context=context,
            date_added=now or datetime.now(),
        )
        self.vocabulary.append(entry)
        return entry

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "level": self.level,
            "xp": self.xp,
            "completed_lessons": list(self.completed_lessons),
            "vocabulary": [entry.to_dict() for entry in self.vocabulary],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LanguageProgress:
        """Rebuild progress from its serialized form."""
        return cls(
            level=max(1, int(data.get("level", 1))),
            xp=max(0, int(data.get("xp", 0))),
            completed_lessons=list(data.get("completed_lessons", [])),
            vocabulary=[VocabularyEntry.from_dict(v) for v in data.get("vocabulary", [])],
        )


@dataclass
class UserSettings:
    """Learner preferences."""

    daily_goal: int = 10  # minutes
    notifications: bool = True
    dark_mode: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "daily_goal": self.daily_goal,
            "notifications": self.notifications,
            "dark_mode": self.dark_mode,
        }


@dataclass
class User:
    """The learner's whole persisted record."""

    username: str
    email: str = ""
    selected_language: str | None = None
    progress: dict[str, LanguageProgress] = field(default_factory=dict)
    streak: int = 0
    last_login: datetime = field(default_factory=datetime.now)
    settings: UserSettings = field(default_factory=UserSettings)

    def get_progress(self, language: str) -> LanguageProgress | None:
        """Get progress for a language, or None if never visited."""
        return self.progress.get(language)

    def ensure_progress(self, language: str) -> tuple[LanguageProgress, bool]:
        """Get or create progress for a language.

        Returns:
            Tuple of (progress, created) where created is True on first visit
        """
        if language in self.progress:
            return self.progress[language], False
        self.progress[language] = LanguageProgress()
        return self.progress[language], True

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "username": self.username,
            "email": self.email,
            "selected_language": self.selected_language,
            "progress": {lang: prog.to_dict() for lang, prog in self.progress.items()},
            "streak": self.streak,
            "last_login": self.last_login.isoformat(),
            "settings": self.settings.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> User:
        """Rebuild a user from its serialized form."""
        settings = data.get("settings", {})
        return cls(
            username=data["username"],
            email=data.get("email", ""),
            selected_language=data.get("selected_language"),
            progress={
                lang: LanguageProgress.from_dict(prog)
                for lang, prog in data.get("progress", {}).items()
            },
            streak=max(0, int(data.get("streak", 0))),
            last_login=_parse_dt(data.get("last_login")) or datetime.now(),
            settings=UserSettings(
                daily_goal=int(settings.get("daily_goal", 10)),
                notifications=bool(settings.get("notifications", True)),
                dark_mode=bool(settings.get("dark_mode", False)),
            ),
        )


# =============================================================================
# STORE
# =============================================================================


class ProgressStore:
    """Holds the active user and delegates persistence to an adapter.

    Saves are fire-and-forget: a failing adapter is logged and the
    in-memory record stays authoritative.
    """

    def __init__(self, adapter: StorageAdapter, key: str = "languageAppUser"):
        self.adapter = adapter
        self.key = key
        self.user: User | None = None

    @property
    def is_authenticated(self) -> bool:
        """Whether a user record is active."""
        return self.user is not None

    def load(self) -> User | None:
        """Load the persisted user into the store."""
        try:
            self.user = self.adapter.load(self.key)
        except Exception as e:
            logger.error("user_load_failed", key=self.key, error=str(e))
            self.user = None
        return self.user

    def save(self, user: User | None = None) -> bool:
        """Persist a full snapshot of the user.

        Args:
            user: Record to save; becomes the active user. Defaults to the active user.

        Returns:
            True if the adapter accepted the snapshot
        """
        if user is not None:
            self.user = user
        if self.user is None:
            return False
        try:
            self.adapter.save(self.key, self.user)
        except Exception as e:
            logger.error("user_save_failed", key=self.key, error=str(e))
            return False
        return True

    def init_progress(self, language: str) -> LanguageProgress:
        """Create progress for a language on first visit; never overwrites.

        Raises:
            RuntimeError: If no user is active
        """
        if self.user is None:
            raise RuntimeError("No active user")
        progress, created = self.user.ensure_progress(language)
        if created:
            logger.info("language_progress_created", language=language)
        return progress

    def clear(self) -> None:
        """Drop the active user from memory (the persisted copy remains)."""
        self.user = None
