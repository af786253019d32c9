"""Tests for YAML configuration loading."""

from pathlib import Path

from lingualearn.config.app_config import CONFIG_FILE, load_app_config
from lingualearn.config.languages import (
    LANGUAGES_FILE,
    get_language,
    list_language_names,
    load_languages,
)


def _write(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


class TestLoadAppConfig:
    """Tests for load_app_config."""

    def test_defaults_without_file(self, isolated_dir):
        config = load_app_config()
        assert config.rules.exercise_xp == 10
        assert config.rules.lesson_bonus_xp == 50
        assert config.rules.level_step_xp == 100
        assert config.notifications.ttl_seconds == 5.0
        assert config.storage.key == "languageAppUser"
        assert config.user_defaults.dark_mode is False

    def test_partial_file_merges_over_defaults(self, isolated_dir):
        _write(CONFIG_FILE, "rules:\n  exercise_xp: 15\nstorage:\n  state_dir: elsewhere\n")
        config = load_app_config()
        assert config.rules.exercise_xp == 15
        assert config.rules.lesson_bonus_xp == 50
        assert config.storage.state_dir == "elsewhere"
        assert config.storage.key == "languageAppUser"

    def test_cached_until_forced(self, isolated_dir):
        first = load_app_config()
        _write(CONFIG_FILE, "rules:\n  exercise_xp: 20\n")
        assert load_app_config() is first
        assert load_app_config(force_reload=True).rules.exercise_xp == 20

    def test_invalid_yaml_uses_defaults(self, isolated_dir):
        _write(CONFIG_FILE, "rules: [unclosed\n")
        assert load_app_config().rules.exercise_xp == 10

    def test_unknown_section_ignored(self, isolated_dir):
        _write(CONFIG_FILE, "extras:\n  foo: 1\n")
        assert load_app_config().rules.level_step_xp == 100


class TestLanguages:
    """Tests for the language registry."""

    def test_defaults_without_file(self, isolated_dir):
        assert list_language_names() == [
            "Spanish",
            "French",
            "German",
            "Italian",
            "Japanese",
            "Mandarin",
            "Korean",
        ]
        assert get_language("Japanese").locale == "ja-JP"
        assert get_language("Klingon") is None

    def test_file_defines_languages(self, isolated_dir):
        _write(
            LANGUAGES_FILE,
            "languages:\n  - name: Portuguese\n    locale: pt-BR\n  - Dutch\n",
        )
        languages = load_languages()
        assert list(languages) == ["Portuguese", "Dutch"]
        assert languages["Portuguese"].locale == "pt-BR"
        assert languages["Dutch"].flag == ""

    def test_empty_file_uses_defaults(self, isolated_dir):
        _write(LANGUAGES_FILE, "languages: []\n")
        assert "Spanish" in list_language_names()

    def test_malformed_entry_uses_defaults(self, isolated_dir):
        _write(LANGUAGES_FILE, "languages:\n  - locale: xx\n")
        assert "Spanish" in list_language_names()
