"""
Environment settings using pydantic-settings.
Points the wizard at its YAML configuration and the application config file.
"""
from typing import Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from services.wizard.models import GenerationMode

class Settings(BaseSettings):
    """
    Application settings loaded from environment variables and .env files.
    """
    model_config = SettingsConfigDict(
        env_file=('.env', '.env.local'),  # Load both .env and .env.local
        env_file_encoding='utf-8',
        extra='ignore',
        case_sensitive=False
    )

    # --- Logging ---
    LOG_LEVEL: str = Field("INFO", description="Logging level")
    LOG_JSON: bool = Field(True, description="Render logs as JSON instead of console text")

    # --- Wizard ---
    WIZARD_CONFIG_PATH: str = Field("config/config.yaml", description="Path to the wizard YAML configuration")
    APP_CONFIG_PATH: Optional[str] = Field(None, description="XML application configuration to read connection string names from")
    GENERATION_MODE: Optional[GenerationMode] = Field(None, description="Override for the generation mode")

    @field_validator("LOG_LEVEL")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {value}")
        return level


def get_settings() -> Settings:
    return Settings()
