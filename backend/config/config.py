"""
Settings for the WellnessWave backend.

Values come from the environment or a local `.env` file. Every field has a
development default; `get_safe_config_dict()` is what gets logged.
"""

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

Environment = Literal["development", "staging", "production"]
LanguageCode = Literal["en", "hi", "gu"]


class Settings(BaseSettings):
    """
    Runtime configuration.

    Groups:
        service: name, version, environment, bind address, CORS
        assistant: default language, translation strictness, session expiry
        storage: user profile backend and ArangoDB connection
        logging: level and renderer
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=False,
        extra="ignore",
    )

    # Service
    app_name: str = Field(default="WellnessWave Assistant", description="Service name shown in docs and logs")
    app_version: str = Field(default="1.0.0", description="Service version")
    environment: Environment = Field(default="development", description="Where the service runs")
    debug: bool = Field(default=False, description="Expose /docs and enable reload")
    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=8000, ge=1, le=65535, description="Bind port")
    cors_origins: list[str] = Field(
        default=["http://localhost:5173", "http://localhost:8080"],
        description="Frontend origins allowed to call the API"
    )

    # Assistant
    default_language: LanguageCode = Field(
        default="en",
        description="Language used when a request does not name one"
    )
    strict_translations: bool = Field(
        default=False,
        description="Fail startup when a rule lacks a translation instead of falling back"
    )
    session_timeout_minutes: int = Field(
        default=60,
        ge=1,
        description="Minutes before an idle user health context expires"
    )

    # Storage
    user_store_backend: Literal["arango", "memory"] = Field(
        default="memory",
        description="Where user profiles are persisted"
    )
    arango_host: str = Field(default="http://localhost:8529", description="ArangoDB URL")
    arango_database: str = Field(default="wellnesswave", description="ArangoDB database name")
    arango_username: str = Field(
        default="root",
        validation_alias=AliasChoices("ARANGODB_USERNAME", "ARANGO_USERNAME"),
        description="ArangoDB user"
    )
    arango_password: SecretStr = Field(
        default=SecretStr(""),
        validation_alias=AliasChoices("ARANGODB_PASSWORD", "ARANGO_PASSWORD"),
        description="ArangoDB password"
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO", description="Root log level")
    log_format: Literal["json", "console"] = Field(default="console", description="Log renderer")

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def get_safe_config_dict(self) -> dict:
        """Settings as a dict with the database password hidden."""
        return self.model_dump(mode="json", exclude={"arango_password"}) | {
            "arango_password_set": bool(self.arango_password.get_secret_value()),
        }


@lru_cache
def get_settings() -> Settings:
    """Load settings once per process; tests clear the cache to reload."""
    return Settings()
