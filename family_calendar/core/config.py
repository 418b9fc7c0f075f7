"""Application configuration via environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables or .env file."""
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Application
    app_name: str = "Family Calendar"
    debug: bool = False

    # Server
    allowed_origins: str = "*"  # Comma-separated origins, or "*" for all

    # Database
    database_url: str = "sqlite:///./family_calendar.db"

    # Header set by the upstream auth layer with the signed-in user's id
    viewer_header: str = "X-User-Id"

    # Calendar views
    list_horizon_days: int = 60
    max_range_days: int = 366


settings = Settings()
