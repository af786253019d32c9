"""Tests for persistence adapters."""

import json
from datetime import datetime

from lingualearn.core.progress import User
from lingualearn.core.storage import (
    USER_SCHEMA,
    JsonFileStorage,
    MemoryStorage,
    deserialize_user,
    serialize_user,
)


def _user() -> User:
    user = User(username="ana", email="ana@example.com", last_login=datetime(2024, 3, 15, 8, 0))
    user.ensure_progress("French")[0].add_word("chat", "cat", now=datetime(2024, 3, 14))
    return user


class TestSerialization:
    """Tests for the schema-tagged snapshot."""

    def test_snapshot_carries_schema(self):
        data = serialize_user(_user())
        assert data["$schema"] == USER_SCHEMA
        assert data["username"] == "ana"
        assert "French" in data["progress"]

    def test_wrong_schema_rejected(self):
        data = serialize_user(_user())
        data["$schema"] = "something_else"
        assert deserialize_user(data) is None


class TestJsonFileStorage:
    """Tests for JsonFileStorage."""

    def test_save_writes_full_snapshot(self, tmp_path):
        storage = JsonFileStorage(tmp_path / "state")
        storage.save("languageAppUser", _user())

        path = tmp_path / "state" / "languageAppUser.json"
        assert path.exists()
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["$schema"] == USER_SCHEMA
        assert data["progress"]["French"]["vocabulary"][0]["word"] == "chat"
        assert not (tmp_path / "state" / "languageAppUser.json.tmp").exists()

    def test_load_round_trip(self, tmp_path):
        storage = JsonFileStorage(tmp_path)
        storage.save("languageAppUser", _user())
        assert storage.load("languageAppUser") == _user()

    def test_load_missing_returns_none(self, tmp_path):
        assert JsonFileStorage(tmp_path).load("languageAppUser") is None

    def test_load_corrupted_returns_none(self, tmp_path):
        (tmp_path / "languageAppUser.json").write_text("{not json", encoding="utf-8")
        assert JsonFileStorage(tmp_path).load("languageAppUser") is None

    def test_load_missing_username_returns_none(self, tmp_path):
        (tmp_path / "languageAppUser.json").write_text(
            json.dumps({"$schema": USER_SCHEMA}), encoding="utf-8"
        )
        assert JsonFileStorage(tmp_path).load("languageAppUser") is None


class TestMemoryStorage:
    """Tests for MemoryStorage."""

    def test_snapshot_is_isolated_from_live_user(self):
        storage = MemoryStorage()
        user = _user()
        storage.save("k", user)
        user.streak = 99
        assert storage.load("k").streak == 0

    def test_unknown_key(self):
        storage = MemoryStorage()
        assert storage.load("k") is None
