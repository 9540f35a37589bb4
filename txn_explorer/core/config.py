"""Configuration management for the Transaction Explorer service.

Configuration is loaded from environment variables, one settings group per
prefix.
"""

from __future__ import annotations

from enum import Enum
from functools import lru_cache

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppEnvironment(str, Enum):
    LOCAL = "local"
    TEST = "test"
    PROD = "prod"


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class StorageBackend(str, Enum):
    MEMORY = "memory"
    FILE = "file"


class AppConfig(BaseSettings):
    name: str = Field(default="fraud-transaction-explorer")
    env: AppEnvironment = Field(default=AppEnvironment.LOCAL)
    version: str = Field(default="0.1.0")
    debug: bool = Field(default=False)
    log_level: LogLevel = Field(default=LogLevel.INFO)

    model_config = SettingsConfigDict(env_prefix="APP_")

    @field_validator("env", mode="before")
    @classmethod
    def validate_env(cls, v: str | AppEnvironment) -> AppEnvironment:
        if isinstance(v, AppEnvironment):
            return v
        return AppEnvironment(v)

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str | LogLevel) -> LogLevel:
        if isinstance(v, LogLevel):
            return v
        return LogLevel(v.upper())


class ServerConfig(BaseSettings):
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8080)
    workers: int = Field(default=1)

    model_config = SettingsConfigDict(env_prefix="SERVER_")


class DataSourceConfig(BaseSettings):
    # Local path or http(s) URL of the transactions CSV
    location: str = Field(default="./data.csv")
    timeout: float = Field(default=30.0)
    max_attempts: int = Field(default=3, ge=1)
    base_delay_seconds: float = Field(default=1.0, ge=0)
    max_delay_seconds: float = Field(default=10.0, ge=0)
    load_on_startup: bool = Field(default=True)

    model_config = SettingsConfigDict(env_prefix="DATA_SOURCE_")

    @property
    def is_remote(self) -> bool:
        """Whether the location is fetched over HTTP."""
        return self.location.startswith(("http://", "https://"))


class TableConfig(BaseSettings):
    page_size: int = Field(default=50, ge=1)
    max_page_size: int = Field(default=500, ge=1)
    status_column: str = Field(default="state")
    fraud_column: str = Field(default="fraud")
    fraud_value: str = Field(default="1")
    declined_value: str = Field(default="declined")

    model_config = SettingsConfigDict(env_prefix="TABLE_")


class StorageConfig(BaseSettings):
    backend: StorageBackend = Field(default=StorageBackend.FILE)
    path: str = Field(default="./.txn_explorer_store.json")

    model_config = SettingsConfigDict(env_prefix="STORAGE_")

    @field_validator("backend", mode="before")
    @classmethod
    def validate_backend(cls, v: str | StorageBackend) -> StorageBackend:
        if isinstance(v, StorageBackend):
            return v
        return StorageBackend(v.lower())


class AuthConfig(BaseSettings):
    username: str = Field(default="test")
    password: SecretStr = Field(default=SecretStr("yesiwill"))

    model_config = SettingsConfigDict(env_prefix="AUTH_")


class ObservabilityConfig(BaseSettings):
    service_name: str = Field(default="fraud-transaction-explorer")
    log_record_format: str = Field(default="json")

    model_config = SettingsConfigDict(env_prefix="OTEL_")


class SecurityConfig(BaseSettings):
    cors_allowed_origins: str = Field(default="http://localhost:3000,http://localhost:5173")
    cors_allow_credentials: bool = Field(default=True)
    cors_allow_methods: list[str] = Field(default=["GET", "POST", "PATCH", "DELETE", "PUT"])
    cors_allow_headers: list[str] = Field(default=["Content-Type", "X-Request-ID"])

    model_config = SettingsConfigDict(env_prefix="SECURITY_")

    @field_validator("cors_allowed_origins", mode="after")
    @classmethod
    def validate_cors_allowed_origins(cls, v: str | list[str]) -> list[str]:
        """Parse comma-separated string into list of origins."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v


class Settings(BaseSettings):
    app: AppConfig = Field(default_factory=AppConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    data_source: DataSourceConfig = Field(default_factory=DataSourceConfig)
    table: TableConfig = Field(default_factory=TableConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)
    security: SecurityConfig = Field(default_factory=SecurityConfig)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def reload_settings() -> Settings:
    """Reload settings (useful for testing)."""
    get_settings.cache_clear()
    return get_settings()
