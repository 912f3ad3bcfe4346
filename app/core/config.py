"""
Application configuration using Pydantic Settings.

Loads configuration from environment variables (.env file).
"""

from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Project Info
    PROJECT_NAME: str = "ATLAS Adaptive Training Lock And Readiness Service"
    VERSION: str = "0.1.0"
    AUTHORS: List[str] = ["Roberto Martelloni"]
    AUTHORS_EMAILS: List[str] = ["rmartelloni@gmail.com"]
    PROJECT_URL: str = "https://github.com/boos/ATLAS"

    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_USER: str = "postgres"
    DATABASE_PASSWORD: str = "postgres"
    DATABASE_HOST: str = "localhost"
    DATABASE_PORT: int = 5432
    DATABASE_DBNAME: str = "postgres"

    # Full URL, overrides the parts above (e.g. "sqlite://" for local runs)
    DATABASE_URI: Optional[str] = None

    # Plan adaptation
    DEFAULT_PLAN_RIGIDITY: str = "LOCKED_1_DAY"
    COACH_PLAN_CONFIDENCE: int = 85
    DEFAULT_WORKOUT_DURATION_MIN: int = 60
    DEFAULT_INTENT_LOCALE: str = "en"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    @property
    def DATABASE_URL(self) -> str:
        if self.DATABASE_URI:
            return self.DATABASE_URI
        return (f"postgresql://{self.DATABASE_USER}:{self.DATABASE_PASSWORD}@{self.DATABASE_HOST}"
                f":{self.DATABASE_PORT}"
                f"/{self.DATABASE_DBNAME}")


# Global settings instance
settings = Settings()
