import logging
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Spreadsheet published by the tournament organisers
DEFAULT_SHEET_ID = "1qLCQ-6uTyusQRsY23d0tvtEx2XcYmR4MLuwGVriow58"


class AppSettings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    # Google Sheets Configuration
    sheet_id: str = Field(
        DEFAULT_SHEET_ID, description="ID of the published Google Sheets document."
    )
    teams_csv_url: Optional[str] = Field(
        None,
        description="Full CSV export URL for the teams sheet. Derived from sheet_id when unset.",
    )
    documents_sheet_name: str = Field(
        "Dokumenty", description="Name of the sheet listing downloadable documents."
    )
    documents_range: str = Field(
        "A2:F20", description="Cell range of the documents sheet (without headers)."
    )

    # HTTP Configuration
    http_timeout_seconds: float = Field(
        30.0,
        gt=0,
        description="Timeout applied to every request made against Google Sheets.",
    )
    user_agent: str = Field(
        "rosterboard/0.1 (+https://docs.google.com/spreadsheets)",
        description="User-Agent header sent with each request.",
    )

    # Logging Configuration
    log_level: str = Field(
        "INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)."
    )

    # Pydantic Settings Configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @property
    def resolved_teams_csv_url(self) -> str:
        if self.teams_csv_url:
            return self.teams_csv_url
        return f"https://docs.google.com/spreadsheets/d/e/{self.sheet_id}/pub?output=csv"


def load_settings() -> AppSettings:
    """Loads and validates application settings."""
    try:
        settings = AppSettings()
        log_level_upper = settings.log_level.upper()
        # Validate log_level even if loaded from .env
        if log_level_upper not in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            logging.warning(
                f"Invalid LOG_LEVEL '{settings.log_level}' found in .env or default. Using INFO."
            )
            settings.log_level = "INFO"
        else:
            settings.log_level = log_level_upper
        return settings
    except Exception as e:
        logging.exception(f"Error loading application settings: {e}")
        raise SystemExit("Failed to load application settings. Exiting.")


settings: AppSettings = load_settings()
