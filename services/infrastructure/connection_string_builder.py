"""
Connection String Builder for the model wizard.
Builds the connection string shown to the user from a provider and a raw provider connection string.
"""
from typing import Optional
from uuid import UUID
import structlog

from services.common.exceptions import ValidationError
from services.infrastructure.provider_registry import ProviderRegistry, get_invariant_name
from services.wizard.models import GenerationMode, ModelLocation

logger = structlog.get_logger()

SQL_CLIENT_INVARIANT_NAME = "System.Data.SqlClient"
METADATA_EXTENSIONS = ("csdl", "ssdl", "msl")


def build_metadata_clause(model_name: str) -> str:
    """
    Build the ``metadata=`` clause pointing at the model's embedded resources.

    Args:
        model_name: Resource name of the model, already namespace-qualified

    Returns:
        e.g. ``metadata=res://*/myModel.csdl|res://*/myModel.ssdl|res://*/myModel.msl``
    """
    return "metadata=" + "|".join(f"res://*/{model_name}.{ext}" for ext in METADATA_EXTENSIONS)


def build_entity_connection_string(model_name: str, invariant_name: str, provider_connection_string: str) -> str:
    """
    Compose an entity connection string.

    The provider connection string is quoted verbatim. Double quotes inside it
    are not escaped, so a fragment containing ``"`` yields a string that
    cannot be parsed back.
    """
    return (
        f"{build_metadata_clause(model_name)};"
        f"provider={invariant_name};"
        f'provider connection string="{provider_connection_string}"'
    )


def _keywords(connection_string: str) -> set:
    keywords = set()
    for part in connection_string.split(";"):
        key = part.split("=", 1)[0].strip().lower()
        if key:
            keywords.add(key)
    return keywords


def decorate_provider_connection_string(
    invariant_name: str,
    provider_connection_string: str,
    application_name: str = "EntityFramework"
) -> str:
    """
    Add the settings Entity Framework expects on SqlClient connection strings.

    Appends ``MultipleActiveResultSets=True`` and ``App=<application_name>``
    unless the keywords are already present. Other providers are returned unchanged.

    Existing keywords keep the casing the user typed. SqlClient itself would
    rewrite them to its canonical form (``Integrated Security`` becomes
    ``integrated security``); that rewrite is not reproduced here.
    """
    if invariant_name != SQL_CLIENT_INVARIANT_NAME:
        return provider_connection_string

    present = _keywords(provider_connection_string)
    additions = []
    if "multipleactiveresultsets" not in present:
        additions.append("MultipleActiveResultSets=True")
    if not present & {"app", "application name"}:
        additions.append(f"App={application_name}")
    if not additions:
        return provider_connection_string

    base = provider_connection_string.rstrip().rstrip(";")
    return ";".join(([base] if base else []) + additions)


class ConnectionStringBuilder:
    """Builds connection strings shaped by the wizard's generation mode."""

    def __init__(
        self,
        provider_registry: ProviderRegistry,
        mode: GenerationMode,
        model_location: Optional[ModelLocation] = None,
        decorate_sql_client: bool = False,
        application_name: str = "EntityFramework"
    ):
        """
        Initialize connection string builder.

        Args:
            provider_registry: Registry used to resolve provider identities
            mode: Generation mode selected in the wizard
            model_location: Model file location (required for DatabaseFirstFromEdmx)
            decorate_sql_client: Add EF settings to SqlClient connection strings (default: False)
            application_name: Value of the App keyword when decorating (default: EntityFramework)
        """
        self.provider_registry = provider_registry
        self.mode = GenerationMode(mode)
        self.model_location = model_location
        self.decorate_sql_client = decorate_sql_client
        self.application_name = application_name

    def build(self, provider_identity: UUID, provider_connection_string: str) -> str:
        """
        Build the connection string to display for the selected provider.

        Args:
            provider_identity: GUID of the data provider
            provider_connection_string: Raw connection string entered by the user

        Returns:
            The raw string for CodeFirstFromDatabase, an entity connection string otherwise

        Raises:
            ProviderNotFoundError: If the provider is needed and not registered
            ValidationError: If DatabaseFirstFromEdmx is used without a model location
        """
        if self.mode == GenerationMode.CODE_FIRST_FROM_DATABASE:
            if not self.decorate_sql_client:
                return provider_connection_string
            invariant_name = get_invariant_name(self.provider_registry, provider_identity)
            return decorate_provider_connection_string(
                invariant_name, provider_connection_string, self.application_name
            )

        invariant_name = get_invariant_name(self.provider_registry, provider_identity)
        if self.model_location is None:
            raise ValidationError(
                "A model location is required to build an entity connection string",
                details={"mode": self.mode.value}
            )

        if self.decorate_sql_client:
            provider_connection_string = decorate_provider_connection_string(
                invariant_name, provider_connection_string, self.application_name
            )

        model_name = self.model_location.resource_name()
        logger.debug(
            "entity_connection_string_built",
            provider=invariant_name,
            model=model_name,
            provider_connection_string_length=len(provider_connection_string),
        )
        return build_entity_connection_string(model_name, invariant_name, provider_connection_string)

    @classmethod
    def from_config(
        cls,
        config,
        provider_registry: ProviderRegistry,
        model_location: Optional[ModelLocation] = None
    ) -> "ConnectionStringBuilder":
        """
        Create builder from the wizard configuration.

        Args:
            config: WizardConfig instance
            provider_registry: Registry used to resolve provider identities
            model_location: Model file location

        Returns:
            ConnectionStringBuilder instance
        """
        return cls(
            provider_registry=provider_registry,
            mode=config.generation_mode,
            model_location=model_location,
            decorate_sql_client=config.entity_framework.decorate_sql_client,
            application_name=config.entity_framework.app_name
        )


def build_connection_string(
    provider_registry: ProviderRegistry,
    provider_identity: UUID,
    provider_connection_string: str,
    mode: GenerationMode,
    model_location: Optional[ModelLocation] = None
) -> str:
    return ConnectionStringBuilder(provider_registry, mode, model_location).build(
        provider_identity, provider_connection_string
    )
