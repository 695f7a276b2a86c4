import logging

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_DEFAULT_BASE_OVERRIDE_KEY = "_base"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="BABELCHAIN_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Fallback
    base_override_key: str = _DEFAULT_BASE_OVERRIDE_KEY
    global_base: str | list[str] = "en"

    # Loading
    path_format: str = "locales/{0}.json"
    encoding: str = "utf-8"

    # Bulk apply
    translate_attribute: str = "data-i18n"

    # App
    debug: bool = False

    @field_validator("base_override_key")
    @classmethod
    def _check_override_key(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("base_override_key cannot be empty")
        return v

    @field_validator("global_base", mode="before")
    @classmethod
    def _split_global_base(cls, v):
        # "en-gb, en-us" in .env files is accepted as a list
        if isinstance(v, str) and "," in v:
            return [part.strip() for part in v.split(",") if part.strip()]
        return v


settings = Settings()

_log = logging.getLogger(__name__)
if "{0}" not in settings.path_format:
    _log.warning(
        "BABELCHAIN_PATH_FORMAT %r has no '{0}' placeholder; every language "
        "will be loaded from the same file.",
        settings.path_format,
    )
