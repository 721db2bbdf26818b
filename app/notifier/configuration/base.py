"""Base class shared by every settings section."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class NotifierBaseSettings(BaseSettings):
    """Settings section read from the process environment and ``.env``.

    Variable names match field aliases exactly; unrelated variables in the
    environment are ignored.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )
