"""Application configuration loader.

Loads centralized configuration from data/config/app_config_v1.yaml,
falling back to built-in defaults for any missing section or key.

Usage:
    from lingualearn.config.app_config import load_app_config

    config = load_app_config()
    bonus = config.rules.lesson_bonus_xp
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog
import yaml

logger = structlog.get_logger(__name__)

# Config file path (relative to project root)
CONFIG_FILE = Path("data/config/app_config_v1.yaml")


@dataclass
class RulesConfig:
    """XP and level rules."""

    exercise_xp: int = 10
    lesson_bonus_xp: int = 50
    level_step_xp: int = 100


@dataclass
class NotificationConfig:
    """Notification queue settings."""

    ttl_seconds: float = 5.0


@dataclass
class StorageConfig:
    """Where the user record is persisted."""

    state_dir: str = "data/state"
    key: str = "languageAppUser"


@dataclass
class UserDefaults:
    """Settings given to newly registered users."""

    daily_goal: int = 10  # minutes
    notifications: bool = True
    dark_mode: bool = False


@dataclass
class AppConfig:
    """Application-wide configuration."""

    rules: RulesConfig = field(default_factory=RulesConfig)
    notifications: NotificationConfig = field(default_factory=NotificationConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    user_defaults: UserDefaults = field(default_factory=UserDefaults)


# Module-level cache
_cached_config: AppConfig | None = None


def _get_defaults() -> dict[str, Any]:
    """Get default configuration values."""
    return {
        "rules": {
            "exercise_xp": 10,
            "lesson_bonus_xp": 50,
            "level_step_xp": 100,
        },
        "notifications": {
            "ttl_seconds": 5.0,
        },
        "storage": {
            "state_dir": "data/state",
            "key": "languageAppUser",
        },
        "user_defaults": {
            "daily_goal": 10,
            "notifications": True,
            "dark_mode": False,
        },
    }


def _merge(defaults: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    """Overlay file sections onto defaults, one level deep."""
    result = {section: dict(values) for section, values in defaults.items()}
    for section, values in (overrides or {}).items():
        if section in result and isinstance(values, dict):
            result[section].update(values)
        else:
            logger.debug("unknown_config_section", section=section)
    return result


def _parse_config(data: dict[str, Any]) -> AppConfig:
    """Parse configuration dictionary into AppConfig object."""
    rules = data["rules"]
    storage = data["storage"]
    user_defaults = data["user_defaults"]

    return AppConfig(
        rules=RulesConfig(
            exercise_xp=int(rules["exercise_xp"]),
            lesson_bonus_xp=int(rules["lesson_bonus_xp"]),
            level_step_xp=int(rules["level_step_xp"]),
        ),
        notifications=NotificationConfig(
            ttl_seconds=float(data["notifications"]["ttl_seconds"]),
        ),
        storage=StorageConfig(
            state_dir=str(storage["state_dir"]),
            key=str(storage["key"]),
        ),
        user_defaults=UserDefaults(
            daily_goal=int(user_defaults["daily_goal"]),
            notifications=bool(user_defaults["notifications"]),
            dark_mode=bool(user_defaults["dark_mode"]),
        ),
    )


def load_app_config(force_reload: bool = False) -> AppConfig:
    """Load application config, merging the YAML file over defaults.

    Args:
        force_reload: If True, ignore cached config and reload from file.

    Returns:
        AppConfig object with all settings.
    """
    global _cached_config

    if _cached_config is not None and not force_reload:
        return _cached_config

    data = _get_defaults()

    if CONFIG_FILE.exists():
        logger.debug("loading_app_config", source=str(CONFIG_FILE))
        try:
            file_data = yaml.safe_load(CONFIG_FILE.read_text(encoding="utf-8")) or {}
            data = _merge(data, file_data)
        except (yaml.YAMLError, OSError) as e:
            logger.error("app_config_load_failed", error=str(e))
    else:
        logger.info("using_default_config")

    _cached_config = _parse_config(data)
    return _cached_config


def clear_config_cache() -> None:
    """Clear the configuration cache.

    Useful for testing or when config is modified at runtime.
    """
    global _cached_config
    _cached_config = None
