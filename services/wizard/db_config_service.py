"""
Database configuration step of the model wizard.
Ties the wizard state to the connection string builder and the name resolver.
"""
from typing import Optional, Union
from uuid import UUID
import structlog

from config.configuration import get_config
from services.common.exceptions import ValidationError
from services.infrastructure.config_file_loader import ConfigFileLoader
from services.infrastructure.connection_string_builder import ConnectionStringBuilder
from services.infrastructure.provider_registry import InMemoryProviderRegistry, ProviderRegistry
from services.wizard.models import GenerationMode, ModelLocation
from services.wizard.unique_name_resolver import ConfigDocumentLoader, UniqueNameResolver

logger = structlog.get_logger()


class DbConfigService:
    def __init__(
        self,
        provider_registry: Optional[ProviderRegistry] = None,
        config_loader: Optional[ConfigDocumentLoader] = None,
        mode: Optional[GenerationMode] = None,
        model_location: Optional[ModelLocation] = None
    ):
        """
        Initialize the service from explicit collaborators, falling back to configuration.
        """
        self.config = get_config()
        self.mode = GenerationMode(mode) if mode is not None else self.config.generation_mode
        self.model_location = model_location
        self.provider_registry = provider_registry or InMemoryProviderRegistry.from_config(self.config.providers)
        self.config_loader = config_loader or ConfigFileLoader(self.config.app_config_path)

    def get_connection_string(self, provider_identity: Union[UUID, str], provider_connection_string: str) -> str:
        """
        Connection string to show for the selected provider and the user's raw connection string.
        """
        if provider_connection_string is None:
            raise ValidationError("Provider connection string cannot be None")

        builder = ConnectionStringBuilder(
            provider_registry=self.provider_registry,
            mode=self.mode,
            model_location=self.model_location,
            decorate_sql_client=self.config.entity_framework.decorate_sql_client,
            application_name=self.config.entity_framework.app_name
        )
        connection_string = builder.build(provider_identity, provider_connection_string)
        logger.info("connection_string_built", mode=self.mode.value, provider=str(provider_identity))
        return connection_string

    def get_unique_connection_string_name(self, candidate_name: str) -> str:
        """Name for the new connection string that does not clash with the application config."""
        if not candidate_name or not candidate_name.strip():
            raise ValidationError("Connection string name cannot be empty")
        return UniqueNameResolver(self.config_loader).resolve(candidate_name)
