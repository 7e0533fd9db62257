"""Configuration settings for the Call Center Dashboard"""

from typing import Optional, Dict, Any
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from enum import Enum


class Environment(str, Enum):
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Application
    app_name: str = Field(default="Call Center Dashboard")
    app_version: str = Field(default="1.0.0")
    environment: Environment = Field(default=Environment.DEVELOPMENT)
    debug: bool = Field(default=False)

    # Slide dialog defaults
    save_button_text: str = Field(default="Save")
    cancel_button_text: str = Field(default="Cancel")
    saving_button_text: str = Field(default="Saving...")
    grid_columns: int = Field(default=2)
    dialog_width: int = Field(default=480)
    show_divider: bool = Field(default=True)
    validate_on_change: bool = Field(default=False)

    # Submission
    save_timeout_seconds: Optional[float] = Field(default=None)
    submit_error_message: str = Field(
        default="Unable to save changes. Please try again."
    )

    # Logging
    log_level: str = Field(default="INFO")
    log_file: Optional[str] = Field(default=None)
    json_logs: bool = Field(default=False)

    @field_validator("environment", mode="before")
    @classmethod
    def validate_environment(cls, v):
        if isinstance(v, str):
            v = v.lower()
        return v

    @field_validator("grid_columns")
    @classmethod
    def validate_grid_columns(cls, v):
        if v < 1:
            raise ValueError("grid_columns must be at least 1")
        return v

    @field_validator("save_timeout_seconds")
    @classmethod
    def validate_save_timeout(cls, v):
        if v is not None and v <= 0:
            raise ValueError("save_timeout_seconds must be positive")
        return v

    @property
    def is_production(self) -> bool:
        return self.environment == Environment.PRODUCTION

    @property
    def is_development(self) -> bool:
        return self.environment == Environment.DEVELOPMENT

    def get_dialog_settings(self) -> Dict[str, Any]:
        """Get slide dialog display defaults"""
        return {
            "save_button_text": self.save_button_text,
            "cancel_button_text": self.cancel_button_text,
            "saving_button_text": self.saving_button_text,
            "grid_columns": self.grid_columns,
            "width": self.dialog_width,
            "show_divider": self.show_divider,
            "validate_on_change": self.validate_on_change,
        }

    def get_logging_settings(self) -> Dict[str, Any]:
        """Get logging configuration"""
        return {
            "log_level": self.log_level,
            "log_file": self.log_file,
            "json_format": self.json_logs or self.is_production,
            "app_name": self.app_name,
        }


# Create settings instance
settings = Settings()
