"""Application settings powered by ``pydantic-settings``."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Annotated, Any, Literal, Sequence

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

try:
    from .. import __version__ as package_version
except ImportError:  # pragma: no cover - fallback during early bootstrapping
    package_version = "0.1.0"


REPOSITORY_ROOT = Path(__file__).resolve().parents[3]

EnvironmentName = Literal["development", "test", "ci", "production"]
StoreBackend = Literal["firestore", "memory"]
CredentialModel = Literal["principal", "firm"]

_ENVIRONMENT_ALIASES: dict[str, EnvironmentName] = {
    "development": "development",
    "dev": "development",
    "local": "development",
    "test": "test",
    "testing": "test",
    "ci": "ci",
    "production": "production",
    "prod": "production",
}

_ENVIRONMENT_PROFILES: dict[EnvironmentName, dict[str, Any]] = {
    "development": {
        "log_level": "DEBUG",
        "reload": True,
        "store_backend": "memory",
    },
    "test": {
        "log_level": "WARNING",
        "reload": False,
        "store_backend": "memory",
    },
    "ci": {
        "log_level": "INFO",
        "reload": False,
        "store_backend": "memory",
    },
    "production": {
        "log_level": "INFO",
        "reload": False,
        "store_backend": "firestore",
    },
}


class Settings(BaseSettings):
    """Runtime configuration for the voice intake service."""

    model_config = SettingsConfigDict(
        env_prefix="INTAKE_",
        env_file=REPOSITORY_ROOT / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    project_name: str = "Voice Task Intake"
    environment: EnvironmentName = Field(default="development")
    api_prefix: str = Field(default="/api")
    version: str = Field(default=package_version)
    intake_path: str = Field(default="/addTask")

    store_backend: StoreBackend = Field(default="firestore")
    firestore_project: str | None = Field(default=None)
    firestore_database: str = Field(default="(default)")

    token_header: str = Field(default="x-siri-token")
    credential_model: CredentialModel = Field(default="principal")
    token_collection: str = Field(default="siriTokens")
    user_collection: str = Field(default="users")
    firm_collection: str = Field(default="firms")
    firm_token_field: str = Field(default="siriToken")
    firm_actor_id: str = Field(default="siri")
    strict_iso_dates: bool = Field(default=False)

    cors_allow_origins: Annotated[list[str], NoDecode] = Field(default_factory=lambda: ["*"])
    cors_allow_methods: Annotated[list[str], NoDecode] = Field(default_factory=lambda: ["*"])
    cors_allow_headers: Annotated[list[str], NoDecode] = Field(default_factory=lambda: ["*"])
    app_host: str = Field(default="0.0.0.0")
    app_port: int = Field(default=8080)
    log_level: str = Field(default="INFO")
    reload: bool = Field(default=False)

    @field_validator("environment", mode="before")
    @classmethod
    def _normalise_environment(cls, value: object) -> EnvironmentName:
        if isinstance(value, str):
            normalized = value.strip().lower()
        else:
            normalized = ""
        if not normalized:
            normalized = "development"
        return _ENVIRONMENT_ALIASES.get(normalized, "development")

    @field_validator(
        "cors_allow_origins",
        "cors_allow_methods",
        "cors_allow_headers",
        mode="before",
    )
    @classmethod
    def _coerce_comma_separated(cls, value: object) -> list[str]:
        """Allow comma separated strings for CORS configuration."""

        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        if isinstance(value, Sequence):
            return [str(item) for item in value if str(item).strip()]
        return []

    @field_validator("token_header", mode="before")
    @classmethod
    def _normalise_token_header(cls, value: object) -> str:
        if not isinstance(value, str) or not value.strip():
            return "x-siri-token"
        return value.strip().lower()

    @field_validator("intake_path", mode="before")
    @classmethod
    def _normalise_intake_path(cls, value: object) -> str:
        if not isinstance(value, str) or not value.strip("/ "):
            return "/addTask"
        return "/" + value.strip().strip("/")

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalise_log_level(cls, value: object) -> str:
        if not isinstance(value, str):
            return "INFO"
        return value.upper()

    @model_validator(mode="after")
    def _apply_environment_profile(self) -> "Settings":
        profile = _ENVIRONMENT_PROFILES[self.environment]
        fields_set = set(getattr(self, "model_fields_set", set()))
        for field_name, value in profile.items():
            if field_name not in fields_set:
                setattr(self, field_name, value)
        return self


@lru_cache()
def get_settings() -> Settings:
    """Return a cached ``Settings`` instance."""

    return Settings()
