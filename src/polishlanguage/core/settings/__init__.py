from .settings import (
    DEFAULT_BASE_URL,
    DEFAULT_MODEL,
    DEFAULT_POLISH_SHORTCUT,
    DEFAULT_PROMPT,
    DEFAULT_PROVIDER,
    DEFAULT_TRANSLATE_SHORTCUT,
    Settings,
    get_api_key_for_provider,
    get_config_dir,
    get_settings_file,
    migrate_legacy_api_key,
    save_api_key_for_provider,
)

__all__ = [
    "Settings",
    "migrate_legacy_api_key",
    "get_config_dir",
    "get_settings_file",
    "get_api_key_for_provider",
    "save_api_key_for_provider",
    "DEFAULT_BASE_URL",
    "DEFAULT_MODEL",
    "DEFAULT_POLISH_SHORTCUT",
    "DEFAULT_PROMPT",
    "DEFAULT_PROVIDER",
    "DEFAULT_TRANSLATE_SHORTCUT",
]
