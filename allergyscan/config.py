"""Configuration management for allergyscan."""

from pathlib import Path

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """Application configuration."""

    data_dir: Path = Field(
        default_factory=lambda: Path.home() / ".allergyscan",
        alias="ALLERGYSCAN_DATA_DIR",
        description="Directory holding the term store",
    )

    # OCR Configuration
    ocr_backend: str = Field(
        default="google_vision",
        alias="ALLERGYSCAN_OCR_BACKEND",
        description="OCR backend (google_vision, paddle)",
    )
    ocr_language: str = Field(
        default="en",
        alias="ALLERGYSCAN_OCR_LANGUAGE",
        description="Language hint passed to the OCR backend",
    )
    google_credentials_json: SecretStr | None = Field(
        default=None,
        alias="ALLERGYSCAN_GOOGLE_CREDENTIALS_JSON",
        description="Service account JSON for Google Cloud Vision (defaults to application credentials)",
    )

    highlight_style: str = Field(
        default="bold black on yellow",
        alias="ALLERGYSCAN_HIGHLIGHT_STYLE",
        description="Rich style applied to matched terms",
    )

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        populate_by_name=True,
        extra="ignore",
    )


def load_config() -> Config:
    """Load configuration from environment and .env file."""
    return Config()
