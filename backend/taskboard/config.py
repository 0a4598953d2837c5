"""Taskboard configuration — settings loaded from the environment."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Database
    database_url: str = "sqlite:///data/taskboard.db"
    sql_echo: bool = False

    # CORS (comma-separated origins)
    cors_origins: str = "http://localhost:3000"

    # Logging
    log_level: str = "INFO"

    # Password hashing cost (bcrypt log2 rounds, 4..31)
    bcrypt_rounds: int = 12


settings = Settings()
