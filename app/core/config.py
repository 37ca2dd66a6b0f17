"""
Application configuration.
"""

from typing import Any, Literal, Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from pydantic import Field, PostgresDsn, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ASYNC_POSTGRES_SCHEME = "postgresql+asyncpg"

# Schemes handed out by hosting providers and libpq tooling
_SYNC_POSTGRES_SCHEMES = ("postgres", "postgresql", "postgresql+psycopg2", "postgresql+psycopg")


def normalize_database_url(url: str) -> str:
    """
    Point a PostgreSQL URL at the asyncpg driver.

    libpq's ``sslmode`` query parameter is renamed to asyncpg's ``ssl``.
    URLs for other backends are returned untouched.
    """
    parts = urlsplit(url)
    if parts.scheme not in _SYNC_POSTGRES_SCHEMES and parts.scheme != ASYNC_POSTGRES_SCHEME:
        return url

    query = [("ssl" if key == "sslmode" else key, value) for key, value in parse_qsl(parts.query)]
    return urlunsplit((ASYNC_POSTGRES_SCHEME, parts.netloc, parts.path, urlencode(query), parts.fragment))


class Settings(BaseSettings):
    """
    Application settings.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
    )

    # Core Settings
    PROJECT_NAME: str = "Category API"
    PROJECT_DESCRIPTION: str = "CRUD service for categories"
    SERVICE_NAME: str = "category-api"
    VERSION: str = "1.0.0"
    APP_MODE: Literal["debug", "release"] = "debug"
    ENVIRONMENT: str = "development"

    # Server Settings
    HOST: str = "0.0.0.0"
    PORT: int = 8080
    CORS_ORIGINS_STR: str = "*"

    # Database Settings
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_USER: str = "postgres"
    DB_PASSWORD: str = ""
    DB_NAME: str = "categories"
    DB_SSLMODE: str = "disable"
    DB_ECHO: bool = False
    DB_AUTO_MIGRATE: bool = False
    DATABASE_URL: Optional[str] = Field(default=None, validate_default=True)

    @field_validator("DB_SSLMODE", mode="before")
    @classmethod
    def default_sslmode(cls, v: Optional[str]) -> str:
        return v or "disable"

    @field_validator("DATABASE_URL", mode="before")
    @classmethod
    def assemble_db_connection(cls, v: Optional[str], info: ValidationInfo) -> Any:
        if isinstance(v, str) and v:
            return normalize_database_url(v)

        data = info.data
        if not data:
            raise ValueError("Missing data for DATABASE_URL")

        return str(
            PostgresDsn.build(
                scheme=ASYNC_POSTGRES_SCHEME,
                username=data.get("DB_USER"),
                password=data.get("DB_PASSWORD") or None,
                host=data.get("DB_HOST"),
                port=int(data.get("DB_PORT", 5432)),
                path=f"{data.get('DB_NAME') or ''}",
                query=urlencode({"ssl": data.get("DB_SSLMODE") or "disable"}),
            )
        )

    # Sentry Settings
    SENTRY_DSN: Optional[str] = None
    SENTRY_TRACES_SAMPLE_RATE: float = 0.1

    # Prometheus Metrics
    ENABLE_METRICS: bool = True

    # Logging Settings
    LOG_LEVEL: Optional[str] = None
    JSON_LOGS: bool = True

    # Tracing Settings
    ENABLE_TRACING: bool = False
    OTLP_ENDPOINT: Optional[str] = None

    @property
    def is_release(self) -> bool:
        return self.APP_MODE == "release"

    @property
    def log_level(self) -> str:
        if self.LOG_LEVEL:
            return self.LOG_LEVEL.upper()
        return "INFO" if self.is_release else "DEBUG"


settings = Settings()
