from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict
from pathlib import Path
from typing import Annotated, Literal
from functools import lru_cache
from ..validators.config_validators import (
    to_uppercase,
    to_lowercase,
    split_csv,
    normalize_postgres_scheme,
)


class Settings(BaseSettings):
    """
    Application settings loaded from environment.
    """

    # Environment
    ENV: Literal["development", "testing", "staging", "production"] = "development"

    # Database configuration.
    # A full DATABASE_URL wins over the discrete POSTGRES_* parts.
    DATABASE_URL: str | None = None
    DATABASE_SSL_REQUIRE: bool = False
    POSTGRES_DRIVER: str = "psycopg"
    POSTGRES_USERNAME: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str = "vetclinic"

    # Run the create-if-absent DDL on startup
    DB_BOOTSTRAP: bool = True

    # SQLAlchemy
    SQLALCHEMY_ECHO: bool = False

    # HTTP
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    API_PREFIX: str = "/api"
    CORS_ORIGINS: Annotated[list[str], NoDecode] = Field(default_factory=lambda: ["*"])

    # Auth
    JWT_SECRET: str = "development-only-secret-change-me-before-deploying"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRES_MINUTES: int = 60
    BCRYPT_ROUNDS: int = 10

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_FORMAT: Literal["json", "text"] = "json"
    LOG_TO_STDOUT: bool = True
    LOG_DIR: Path = Path("/var/log/vetclinic")
    LOG_MAX_BYTES: int = 10_000_000  # 10 MB
    LOG_BACKUP_COUNT: int = 5
    ENABLE_SQL_LOGGING: bool = False

    # --- Derived settings ---
    @property
    def SQLALCHEMY_DATABASE_URL(self) -> str:
        """
        Return the async SQLAlchemy URL for the configured database.

        - If DATABASE_URL is set (hosted deployments), use it, rewriting a bare
          `postgres://` / `postgresql://` scheme to `postgresql+<driver>://`.
        - Otherwise build the URL from the POSTGRES_* parts.
        """
        if self.DATABASE_URL:
            return normalize_postgres_scheme(self.DATABASE_URL, self.POSTGRES_DRIVER)

        return (
            f"postgresql+{self.POSTGRES_DRIVER}://"
            f"{self.POSTGRES_USERNAME}:{self.POSTGRES_PASSWORD}@"
            f"{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/"
            f"{self.POSTGRES_DB}"
        )

    # --- Validators ---
    @field_validator("LOG_LEVEL", mode="before")
    def normalize_log_level(cls, v: str | None) -> str | None:
        """
        Normalize LOG_LEVEL to uppercase so `LOG_LEVEL=debug` in .env is accepted.
        """
        return to_uppercase(v)

    @field_validator("LOG_FORMAT", mode="before")
    def normalize_log_format(cls, v: str | None) -> str | None:
        """
        Normalize the LOG_FORMAT environment variable value to lowercase.
        """
        return to_lowercase(v)

    @field_validator("CORS_ORIGINS", mode="before")
    def parse_cors_origins(cls, v):
        return split_csv(v)

    # --- Config ---
    model_config = SettingsConfigDict(
        # .env next to the project root (two levels above the package)
        env_file=str(Path(__file__).resolve().parents[3] / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )


# get_settings() takes no arguments and always returns the same settings from the environment,
# so caching it with @lru_cache() avoids re-reading the environment on every call.
@lru_cache()
def get_settings() -> Settings:
    return Settings()
