"""
Application configuration settings loaded from environment variables.
Uses pydantic_settings for validation and type conversion.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional

class Settings(BaseSettings):
    """
    Application settings class with environment variable validation.

    Attributes:
        database_url: SQLAlchemy connection string
        secret_key: Secret key for JWT token signing
        algorithm: Algorithm used for JWT signing (HS256)
        token_expire_days: Lifetime embedded in issued tokens
        session_expire_days: Lifetime of server-side session rows
        bcrypt_rounds: Cost factor for password hashing
        purge_expired_sessions_on_startup: Delete expired session rows at startup
        cors_origins: Allowed frontend origins

        # Bootstrap admin settings (optional)
        bootstrap_admin_email: Optional admin email for first admin creation
        bootstrap_admin_password: Optional admin password for first admin creation
    """
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Database settings
    database_url: str = "sqlite:///./portal.db"

    # JWT settings
    secret_key: str
    algorithm: str = "HS256"
    token_expire_days: int = 7
    session_expire_days: int = 7

    # Password hashing
    bcrypt_rounds: int = 12

    # Session housekeeping
    purge_expired_sessions_on_startup: bool = True

    # Frontend settings
    cors_origins: List[str] = ["http://localhost:3000"]

    # Bootstrap admin settings (optional - only used for first admin creation)
    bootstrap_admin_email: Optional[str] = None
    bootstrap_admin_password: Optional[str] = None

    log_level: str = "INFO"

# Create settings instance
settings = Settings()
