"""
Application Configuration
Uses Pydantic Settings for environment-based configuration
"""

from enum import Enum

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # Ignore unrelated env vars (e.g. MARIADB_*)
    )

    # Application
    PROJECT_NAME: str = "Virtual Gallery API"
    VERSION: str = "1.0.0"
    ENVIRONMENT: str = Field(default="development", pattern="^(development|staging|production)$")
    DEBUG: bool = Field(default=False)
    API_V1_STR: str = "/api/v1"

    # Security
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24  # Tokens live for a day

    # CORS
    # Allow str because it can be a comma-separated string in .env
    CORS_ORIGINS: str | list[str] = Field(
        default=["http://localhost:5173", "http://localhost:3000"]
    )

    # Database
    DATABASE_URL: str
    # Sync URL for Alembic migrations
    DATABASE_URL_SYNC: str | None = None
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 10
    DB_ECHO: bool = False

    # Artwork image storage
    STORAGE_PATH: str = "uploads"
    UPLOADS_URL_PREFIX: str = "/uploads"
    MAX_IMAGE_SIZE: int = 10 * 1024 * 1024  # 10MB

    # Pagination
    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 100

    # Logging
    LOG_LEVEL: str = "INFO"

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: str | list[str]) -> list[str]:
        """Parse CORS origins from comma-separated string"""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",")]
        return v


# Create global settings instance

load_dotenv()
settings = Settings()  # type: ignore[call-arg]


class UserRole(str, Enum):
    """
    Account roles. Fixed at registration; there is no role transition.

    Member names equal their values so the database enum stores the
    same strings the API accepts.
    """

    artist = "artist"
    curator = "curator"
    admin = "admin"


class ArtworkStatus(str, Enum):
    """Artwork moderation states: pending -> approved | rejected."""

    pending = "pending"
    approved = "approved"
    rejected = "rejected"


# Statuses a curator may assign during review
REVIEW_OUTCOMES: frozenset[ArtworkStatus] = frozenset(
    {ArtworkStatus.approved, ArtworkStatus.rejected}
)

# Roles that may register themselves
SELF_REGISTER_ROLES: frozenset[UserRole] = frozenset({UserRole.artist, UserRole.curator})
