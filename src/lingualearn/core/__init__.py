"""Core learning-progress logic.

Modules:
- catalog: Lesson/exercise catalog generation and answer grading
- progress: User record, per-language progress and the progress store
- storage: Persistence adapters for the user record
- streak: Day-streak calculation
- notifications: Time-limited notification queue
- navigator: Screen state machine
- vocabulary: Spaced-repetition review schedule
- engine: Progress engine tying the above together
"""

__all__ = [
    "catalog",
    "progress",
    "storage",
    "streak",
    "notifications",
    "navigator",
    "vocabulary",
    "engine",
]
