"""
Configuration Management Module.
Loads wizard configuration from config.yaml and allows overrides via environment variables.
"""
import yaml
from typing import List, Optional
from pathlib import Path
from uuid import UUID
from pydantic import BaseModel, Field, ValidationError as PydanticValidationError
import structlog

from config.settings import get_settings
from services.common.exceptions import ConfigurationError
from services.wizard.models import GenerationMode

logger = structlog.get_logger()

SQL_CLIENT_PROVIDER_GUID = UUID("91510608-8809-4020-8897-fba057e22d54")
SQL_CLIENT_INVARIANT_NAME = "System.Data.SqlClient"

# --- Configuration Models ---

class ServerConfig(BaseModel):
    transport: str = "stdio"
    log_level: str = "INFO"
    json_logs: bool = True

class ProviderConfig(BaseModel):
    """A data provider registered with the wizard."""
    guid: UUID
    invariant_name: str
    display_name: Optional[str] = None

def _default_providers() -> List[ProviderConfig]:
    return [
        ProviderConfig(
            guid=SQL_CLIENT_PROVIDER_GUID,
            invariant_name=SQL_CLIENT_INVARIANT_NAME,
            display_name=".NET Framework Data Provider for SQL Server",
        )
    ]

class EntityFrameworkConfig(BaseModel):
    # Off by default: code-first strings are shown exactly as entered
    decorate_sql_client: bool = False
    app_name: str = "EntityFramework"

class WizardConfig(BaseModel):
    generation_mode: GenerationMode = GenerationMode.DATABASE_FIRST_FROM_EDMX
    app_config_path: Optional[str] = None
    server: ServerConfig = Field(default_factory=ServerConfig)
    providers: List[ProviderConfig] = Field(default_factory=_default_providers)
    entity_framework: EntityFrameworkConfig = Field(default_factory=EntityFrameworkConfig)

# --- Loader Logic ---

class ConfigLoader:
    _instance: Optional[WizardConfig] = None

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> WizardConfig:
        """
        Load configuration from YAML and override with Environment Variables.
        Singleton pattern to avoid reloading.
        """
        if cls._instance:
            return cls._instance

        try:
            settings = get_settings()
        except PydanticValidationError as e:
            logger.error("settings_validation_error", error=str(e))
            raise ConfigurationError(f"Invalid environment settings: {e}") from e

        # 1. Determine Config Path
        path = Path(config_path or settings.WIZARD_CONFIG_PATH)
        if not path.is_absolute():
            path = Path.cwd() / path

        # 2. Load YAML
        config_data = {}
        if path.exists():
            try:
                with open(path, "r", encoding="utf-8") as f:
                    config_data = yaml.safe_load(f) or {}
            except (OSError, yaml.YAMLError) as e:
                logger.error("config_load_error", error=str(e), path=str(path))
                raise ConfigurationError(
                    f"Failed to load config file at {path}: {e}",
                    details={"path": str(path)}
                ) from e
        else:
            logger.warning("config_file_not_found", path=str(path))

        if not isinstance(config_data, dict):
            raise ConfigurationError(
                f"Config file at {path} must contain a mapping",
                details={"path": str(path)}
            )

        # 3. Validate, then apply environment overrides
        try:
            config = WizardConfig(**config_data)
        except PydanticValidationError as e:
            logger.error("config_validation_error", error=str(e))
            raise ConfigurationError(f"Invalid Configuration: {e}", details={"path": str(path)}) from e

        if settings.GENERATION_MODE is not None:
            config.generation_mode = settings.GENERATION_MODE
            logger.info("generation_mode_overridden", mode=config.generation_mode.value)

        if settings.APP_CONFIG_PATH:
            config.app_config_path = settings.APP_CONFIG_PATH
            logger.info("app_config_path_overridden", path=settings.APP_CONFIG_PATH)

        if "LOG_LEVEL" in settings.model_fields_set:
            config.server.log_level = settings.LOG_LEVEL

        if "LOG_JSON" in settings.model_fields_set:
            config.server.json_logs = settings.LOG_JSON

        cls._instance = config
        return config

    @classmethod
    def reset(cls) -> None:
        """Forget the cached configuration."""
        cls._instance = None


def get_config() -> WizardConfig:
    return ConfigLoader.load()
