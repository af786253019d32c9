"""Persistence adapters for the user record.

Every save writes a structurally complete snapshot of the User; there are
no partial updates. Records are keyed by a fixed storage key.

State persistence:
- <state_dir>/<key>.json  (schema: lingualearn_user_v1)
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Protocol

import structlog

from lingualearn.core.progress import User

logger = structlog.get_logger(__name__)

USER_SCHEMA = "lingualearn_user_v1"


class StorageAdapter(Protocol):
    """Durable key-value storage for the user record."""

    def load(self, key: str) -> User | None: ...

    def save(self, key: str, user: User) -> None: ...


def serialize_user(user: User) -> dict[str, Any]:
    """Snapshot a user with its schema tag."""
    return {"$schema": USER_SCHEMA, **user.to_dict()}


def deserialize_user(data: dict[str, Any]) -> User | None:
    """Rebuild a user from a snapshot, or None if the schema does not match."""
    if data.get("$schema") != USER_SCHEMA:
        logger.warning(
            "user_record_invalid_schema",
            expected=USER_SCHEMA,
            got=data.get("$schema"),
        )
        return None
    return User.from_dict(data)


class JsonFileStorage:
    """Stores each key as a JSON file under a state directory."""

    def __init__(self, state_dir: Path | str | None = None):
        self.state_dir = Path(state_dir) if state_dir is not None else Path("data/state")

    def _path(self, key: str) -> Path:
        return self.state_dir / f"{key}.json"

    def load(self, key: str) -> User | None:
        """Load the user stored under key.

        Returns:
            User, or None if the file is missing or corrupted
        """
        path = self._path(key)
        if not path.exists():
            logger.debug("user_record_not_found", path=str(path))
            return None

        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
            return deserialize_user(data)
        except (json.JSONDecodeError, OSError, KeyError, TypeError, ValueError) as e:
            logger.error("user_record_load_failed", path=str(path), error=str(e))
            return None

    def save(self, key: str, user: User) -> None:
        """Write a full snapshot of the user under key."""
        self.state_dir.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        tmp_path = path.with_suffix(".json.tmp")

        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(serialize_user(user), f, indent=2, ensure_ascii=False)
        tmp_path.replace(path)

        logger.debug("user_record_saved", path=str(path))


class MemoryStorage:
    """In-process storage that keeps serialized snapshots.

    Snapshots are stored as JSON text so later mutation of the live User
    never leaks into what was saved.
    """

    def __init__(self):
        self._records: dict[str, str] = {}

    def load(self, key: str) -> User | None:
        raw = self._records.get(key)
        if raw is None:
            return None
        return deserialize_user(json.loads(raw))

    def save(self, key: str, user: User) -> None:
        self._records[key] = json.dumps(serialize_user(user), ensure_ascii=False)
