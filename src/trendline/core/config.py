"""Library configuration using pydantic-settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="TRENDLINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database used when a Trend is not given a session
    database_url: str = "sqlite+aiosqlite:///./trendline.db"

    # Trend defaults
    default_interval: str = "month"
    default_date_column: str = "created_at"
    default_date_alias: str = "date"

    # Application
    debug: bool = False


settings = Settings()
