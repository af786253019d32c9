"""Configuration package for lingualearn."""

from lingualearn.config.app_config import (
    AppConfig,
    NotificationConfig,
    RulesConfig,
    StorageConfig,
    UserDefaults,
    clear_config_cache,
    load_app_config,
)
from lingualearn.config.languages import (
    LanguageInfo,
    clear_languages_cache,
    get_language,
    list_language_names,
    load_languages,
)

__all__ = [
    "AppConfig",
    "NotificationConfig",
    "RulesConfig",
    "StorageConfig",
    "UserDefaults",
    "clear_config_cache",
    "load_app_config",
    "LanguageInfo",
    "clear_languages_cache",
    "get_language",
    "list_language_names",
    "load_languages",
]
