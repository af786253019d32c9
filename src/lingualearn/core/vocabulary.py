"""Spaced-repetition scheduling for vocabulary entries.

Mastery moves one step per review: up when the learner remembered the
word, down otherwise, clamped to 0-5. Each review appends the next review
date, spaced by the interval for the new mastery level.
"""

from __future__ import annotations

from datetime import datetime, timedelta

from lingualearn.core.progress import MAX_MASTERY_LEVEL, VocabularyEntry

# Days until the next review, indexed by mastery level
REVIEW_INTERVAL_DAYS = [1, 2, 4, 7, 14, 30]


def next_review_date(mastery_level: int, now: datetime) -> datetime:
    """Date of the next review for a given mastery level."""
    level = max(0, min(MAX_MASTERY_LEVEL, mastery_level))
    return now + timedelta(days=REVIEW_INTERVAL_DAYS[level])


def review_entry(entry: VocabularyEntry, remembered: bool, now: datetime | None = None) -> datetime:
    """Apply one review to an entry.

    Args:
        entry: Entry to update in place
        remembered: Whether the learner recalled the translation
        now: Review time (defaults to datetime.now())

    Returns:
        The scheduled date of the next review
    """
    if now is None:
        now = datetime.now()

    if remembered:
        entry.mastery_level = min(MAX_MASTERY_LEVEL, entry.mastery_level + 1)
    else:
        entry.mastery_level = max(0, entry.mastery_level - 1)

    due = next_review_date(entry.mastery_level, now)
    entry.review_dates.append(due)
    return due


def is_due(entry: VocabularyEntry, now: datetime | None = None) -> bool:
    """Whether an entry should be reviewed now.

    Entries that were never reviewed are always due.
    """
    if not entry.review_dates:
        return True
    if now is None:
        now = datetime.now()
    return entry.review_dates[-1] <= now


def due_entries(entries: list[VocabularyEntry], now: datetime | None = None) -> list[tuple[int, VocabularyEntry]]:
    """List (index, entry) pairs that are due for review, in list order."""
    return [(i, entry) for i, entry in enumerate(entries) if is_due(entry, now)]
