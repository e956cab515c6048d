"""Core application configuration and settings.

Handles environment variables, data store location, and application settings.
"""
import logging
from pathlib import Path
from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings


# Load environment variables
ROOT = Path(__file__).resolve().parents[2]
load_dotenv(dotenv_path=ROOT / ".env", override=True)
load_dotenv(override=True)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Data store (JSON documents for forms, responses, schools)
    data_dir: str = Field(default="mock_data", alias="DATA_DIR")

    # Reports
    report_id_prefix: str = Field(default="REP", alias="REPORT_ID_PREFIX")

    # Application Settings
    environment: str = Field(default="development", alias="ENVIRONMENT")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # API Settings
    api_prefix: str = Field(default="/api", alias="API_PREFIX")
    cors_origins: list[str] = Field(
        default_factory=lambda: [
            "http://localhost:5173",
            "http://127.0.0.1:5173"
        ],
        alias="CORS_ORIGINS"
    )

    class Config:
        case_sensitive = False
        env_file = ".env"
        populate_by_name = True

    @property
    def data_path(self) -> Path:
        """Data directory, resolved against the project root when relative."""
        path = Path(self.data_dir)
        return path if path.is_absolute() else ROOT / path

    def validate_required_settings(self):
        """Validate that required settings are present."""
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(
                f"LOG_LEVEL '{self.log_level}' is not a valid logging level."
            )
        if not self.data_path.is_dir():
            raise ValueError(
                f"DATA_DIR '{self.data_dir}' does not exist. "
                "Point DATA_DIR at the directory holding forms.json, responses.json and schools.json."
            )


# Global settings instance
settings = Settings()


# Validate settings on module import (only in non-test environments)
if settings.environment != "test":
    try:
        settings.validate_required_settings()
    except ValueError as e:
        print(f"Configuration Error: {e}")
        # Don't raise in development to allow partial setup
        if settings.environment == "production":
            raise
