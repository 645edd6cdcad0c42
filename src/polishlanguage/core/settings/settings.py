"""
Settings management with JSON persistence.

Handles loading, saving, and validating application settings, including the
one-time migration of the legacy single API key into the per-provider mapping.
Uses platformdirs for cross-platform directory resolution.
"""

import json
from pathlib import Path
from typing import Dict, Optional

from platformdirs import user_config_path
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ...utils.logger import get_logger
from ..errors import PersistenceError
from .config import APP_DIR_NAME

logger = get_logger(__name__)

SETTINGS_FILE_NAME = "settings.json"

DEFAULT_POLISH_SHORTCUT = "CmdOrCtrl+Alt+P"
DEFAULT_TRANSLATE_SHORTCUT = "CmdOrCtrl+Alt+T"
DEFAULT_PROVIDER = "openai"
DEFAULT_MODEL = "gpt-3.5-turbo"
DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_PROMPT = (
    "Please polish and improve the following text while maintaining "
    "its original meaning and tone:"
)

# Never echoed back in validation warnings
_SECRET_FIELDS = frozenset({"api_keys", "legacy_api_key"})


def get_config_dir() -> Path:
    return user_config_path(
        APP_DIR_NAME, appauthor=False, roaming=True, ensure_exists=True
    )


def get_settings_file() -> Path:
    return get_config_dir() / SETTINGS_FILE_NAME


class Settings(BaseModel):
    """
    Persisted application settings.

    Attribute names are snake_case; the JSON keys keep the names existing
    installs were written with (``shortcut``, ``api_key`` ...), so every field
    that differs carries an alias and the record is always dumped by alias.
    """

    model_config = ConfigDict(
        validate_assignment=False, populate_by_name=True, extra="ignore"
    )

    shortcut_polish: str = Field(default=DEFAULT_POLISH_SHORTCUT, alias="shortcut")
    shortcut_translate: str = Field(
        default=DEFAULT_TRANSLATE_SHORTCUT, alias="translate_shortcut"
    )
    api_keys: Dict[str, str] = Field(default_factory=dict)
    legacy_api_key: Optional[str] = Field(default=None, alias="api_key")
    model: str = DEFAULT_MODEL
    base_url: str = DEFAULT_BASE_URL
    prompt: str = DEFAULT_PROMPT
    provider: str = DEFAULT_PROVIDER
    sound_enabled: bool = True
    notifications_enabled: bool = False

    @field_validator("api_keys", mode="before")
    @classmethod
    def drop_empty_api_keys(cls, v):
        if isinstance(v, dict):
            return {
                str(provider): key
                for provider, key in v.items()
                if isinstance(key, str) and key
            }
        return v

    @classmethod
    def load(cls) -> "Settings":
        try:
            config_file = get_settings_file()
            exists = config_file.exists()
        except OSError as e:
            logger.warning(f"Could not locate settings: {e}. Using defaults.")
            return migrate_legacy_api_key(cls())

        if not exists:
            return migrate_legacy_api_key(cls())

        try:
            with open(config_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning(f"Could not load settings: {e}. Using defaults.")
            return migrate_legacy_api_key(cls())

        if not isinstance(data, dict):
            logger.warning("Settings file does not contain an object. Using defaults.")
            return migrate_legacy_api_key(cls())

        settings = cls._load_with_fallbacks(data)
        return migrate_legacy_api_key(settings)

    @classmethod
    def _load_with_fallbacks(cls, data: dict) -> "Settings":
        """Load settings with field-level fallback to defaults on validation errors."""
        result_data = {}

        for field_name, field_info in cls.model_fields.items():
            key = field_info.alias or field_name
            if key in data:
                value = data[key]
            elif field_name in data:
                value = data[field_name]
            else:
                continue

            try:
                cls.model_validate({key: value})
            except ValidationError:
                shown = "<redacted>" if field_name in _SECRET_FIELDS else repr(value)
                logger.warning(
                    f"Invalid {field_name} {shown}, resetting to default"
                )
                continue

            result_data[key] = value

        return cls.model_validate(result_data)

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)

    def save(self) -> None:
        self.legacy_api_key = None
        data = self.to_dict()

        try:
            config_file = get_settings_file()
            with open(config_file, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
        except OSError as e:
            logger.error(f"Failed to write settings: {e}")
            raise PersistenceError(f"Failed to write settings: {e}") from e

        logger.debug(f"Settings saved to {config_file}")

    def resolve_api_key(self) -> str:
        return self.api_keys.get(self.provider, "")

    def set_api_key(self, provider: str, api_key: str) -> None:
        if not api_key:
            self.api_keys.pop(provider, None)
        else:
            self.api_keys[provider] = api_key


def migrate_legacy_api_key(settings: Settings) -> Settings:
    """
    Move the legacy single ``api_key`` into ``api_keys[provider]``.

    Pure and idempotent: returns a new record and leaves the argument untouched.
    The legacy value is only copied when no key exists yet for the active
    provider; the legacy field is cleared in every case.
    """
    legacy_key = settings.legacy_api_key
    if legacy_key is None:
        return settings

    api_keys = dict(settings.api_keys)
    if legacy_key and settings.provider not in api_keys:
        api_keys[settings.provider] = legacy_key
        logger.info(
            f"Migrated legacy API key to per-provider format for '{settings.provider}'"
        )

    return settings.model_copy(update={"api_keys": api_keys, "legacy_api_key": None})


def get_api_key_for_provider(provider: str) -> str:
    return Settings.load().api_keys.get(provider, "")


def save_api_key_for_provider(provider: str, api_key: str) -> None:
    settings = Settings.load()
    settings.set_api_key(provider, api_key)
    settings.save()
