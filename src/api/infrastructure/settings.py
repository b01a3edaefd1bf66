"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from functools import lru_cache

from pydantic import Field, HttpUrl, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database connection settings.

    Environment variables:
        RECIPEBOOK_DB_HOST: Database host (default: localhost)
        RECIPEBOOK_DB_PORT: Database port (default: 5432)
        RECIPEBOOK_DB_DATABASE: Database name (default: recipebook)
        RECIPEBOOK_DB_USERNAME: Database user (default: recipebook)
        RECIPEBOOK_DB_PASSWORD: Database password (required in production)
        RECIPEBOOK_DB_POOL_MIN_CONNECTIONS: Minimum connections in pool (default: 2)
        RECIPEBOOK_DB_POOL_MAX_CONNECTIONS: Maximum connections in pool (default: 10)
    """

    model_config = SettingsConfigDict(
        env_prefix="RECIPEBOOK_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="recipebook", description="Database name")
    username: str = Field(default="recipebook", description="Database username")
    password: SecretStr = Field(
        default=SecretStr(""),
        description="Database password",
    )
    pool_min_connections: int = Field(
        default=2,
        description="Minimum connections in pool",
        ge=1,
        le=100,
    )
    pool_max_connections: int = Field(
        default=10,
        description="Maximum connections in pool",
        ge=1,
        le=100,
    )

    @model_validator(mode="after")
    def validate_pool_settings(self) -> "DatabaseSettings":
        """Validate pool max >= min."""
        if self.pool_max_connections < self.pool_min_connections:
            raise ValueError(
                f"pool_max_connections ({self.pool_max_connections}) must be >= "
                f"pool_min_connections ({self.pool_min_connections})"
            )
        return self

    @property
    def connection_string(self) -> str:
        """Generate a connection string (without password for logging)."""
        return f"postgresql://{self.username}@{self.host}:{self.port}/{self.database}"


class AuthSettings(BaseSettings):
    """Settings for validating identities issued by the session service.

    Credentials and token issuance live outside this service. Requests carry
    an HS256 bearer token whose claims name the user and the active group.

    Environment variables:
        RECIPEBOOK_AUTH_JWT_SECRET: Shared signing secret (required in production)
        RECIPEBOOK_AUTH_JWT_ALGORITHM: Signing algorithm (default: HS256)
        RECIPEBOOK_AUTH_AUDIENCE: Expected audience, unchecked when empty
        RECIPEBOOK_AUTH_USER_ID_CLAIM: Claim holding the user ID (default: sub)
        RECIPEBOOK_AUTH_USERNAME_CLAIM: Claim holding the username
        RECIPEBOOK_AUTH_EMAIL_CLAIM: Claim holding the email address
        RECIPEBOOK_AUTH_GROUP_ID_CLAIM: Claim holding the active group ID
    """

    model_config = SettingsConfigDict(
        env_prefix="RECIPEBOOK_AUTH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    jwt_secret: SecretStr = Field(
        default=SecretStr("dev-secret-change-me"),
        description="Shared secret used to verify bearer tokens",
    )
    jwt_algorithm: str = Field(default="HS256", description="JWT algorithm")
    audience: str = Field(default="", description="Expected audience claim")
    user_id_claim: str = Field(default="sub", description="User ID claim")
    username_claim: str = Field(
        default="preferred_username", description="Username claim"
    )
    email_claim: str = Field(default="email", description="Email claim")
    group_id_claim: str = Field(default="group_id", description="Active group claim")


class ImportSettings(BaseSettings):
    """Settings for the recipe import pipeline.

    Environment variables:
        RECIPEBOOK_IMPORT_EXTRACTOR_URL: Extraction service endpoint (import disabled if unset)
        RECIPEBOOK_IMPORT_EXTRACTOR_TIMEOUT_SECONDS: Request timeout (default: 60)
        RECIPEBOOK_IMPORT_MAX_IMPORTS_PER_WINDOW: Imports allowed per user per window (default: 10)
        RECIPEBOOK_IMPORT_WINDOW_SECONDS: Rolling window length (default: 3600)
    """

    model_config = SettingsConfigDict(
        env_prefix="RECIPEBOOK_IMPORT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    extractor_url: HttpUrl | None = Field(
        default=None, description="Recipe extraction service endpoint"
    )
    extractor_timeout_seconds: float = Field(default=60.0, gt=0)
    max_imports_per_window: int = Field(default=10, ge=1)
    window_seconds: int = Field(default=3600, ge=1)


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="Recipe Book API", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")

    @property
    def database(self) -> DatabaseSettings:
        """Get database settings."""
        return get_database_settings()

    @property
    def auth(self) -> AuthSettings:
        """Get authentication settings."""
        return get_auth_settings()

    @property
    def imports(self) -> ImportSettings:
        """Get import pipeline settings."""
        return get_import_settings()


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


@lru_cache
def get_database_settings() -> DatabaseSettings:
    """Get cached database settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return DatabaseSettings()


@lru_cache
def get_auth_settings() -> AuthSettings:
    """Get cached authentication settings."""
    return AuthSettings()


@lru_cache
def get_import_settings() -> ImportSettings:
    """Get cached import pipeline settings."""
    return ImportSettings()
