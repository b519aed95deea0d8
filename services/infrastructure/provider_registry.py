"""
Data provider registry.
Resolves provider identities (GUIDs) to registered data providers and their properties.
"""
from typing import Any, Dict, Iterable, Optional, Protocol, Union
from uuid import UUID
import structlog

from services.common.exceptions import ProviderNotFoundError

logger = structlog.get_logger()

INVARIANT_NAME = "InvariantName"


class DataProvider(Protocol):
    def get_property(self, name: str) -> Any: ...


class ProviderRegistry(Protocol):
    def get_provider(self, identity: UUID) -> DataProvider: ...


class RegisteredProvider:
    """A data provider described by a bag of named properties."""

    def __init__(self, guid: UUID, properties: Dict[str, Any]):
        self.guid = guid
        self._properties = dict(properties)

    def get_property(self, name: str) -> Any:
        return self._properties.get(name)

    def __repr__(self) -> str:
        return f"RegisteredProvider({self.guid}, {self.get_property(INVARIANT_NAME)!r})"


class InMemoryProviderRegistry:
    """Provider registry backed by a dictionary keyed on provider GUID."""

    def __init__(self, providers: Optional[Dict[UUID, DataProvider]] = None):
        self._providers: Dict[UUID, DataProvider] = dict(providers or {})

    @classmethod
    def from_config(cls, provider_configs: Iterable[Any]) -> "InMemoryProviderRegistry":
        """
        Build a registry from configured providers.

        Args:
            provider_configs: Items exposing ``guid``, ``invariant_name`` and ``display_name``

        Returns:
            InMemoryProviderRegistry instance
        """
        registry = cls()
        for item in provider_configs:
            registry.register(
                item.guid,
                RegisteredProvider(
                    item.guid,
                    {INVARIANT_NAME: item.invariant_name, "DisplayName": item.display_name},
                ),
            )
        return registry

    def register(self, identity: UUID, provider: DataProvider) -> None:
        self._providers[identity] = provider

    def get_provider(self, identity: Union[UUID, str]) -> DataProvider:
        key = _as_uuid(identity)
        provider = self._providers.get(key) if key is not None else None
        if provider is None:
            logger.warning("provider_not_found", provider=str(identity))
            raise ProviderNotFoundError(
                f"No data provider is registered for '{identity}'",
                details={"provider": str(identity)}
            )
        return provider

    def __contains__(self, identity: object) -> bool:
        key = _as_uuid(identity)
        return key is not None and key in self._providers

    def __len__(self) -> int:
        return len(self._providers)


def _as_uuid(identity: object) -> Optional[UUID]:
    if isinstance(identity, UUID):
        return identity
    try:
        return UUID(str(identity))
    except ValueError:
        return None


def get_invariant_name(registry: ProviderRegistry, identity: UUID) -> str:
    """
    Look up the invariant name of a provider.

    Raises:
        ProviderNotFoundError: If the identity is unknown or the provider has no invariant name
    """
    invariant_name = registry.get_provider(identity).get_property(INVARIANT_NAME)
    if not invariant_name:
        raise ProviderNotFoundError(
            f"Data provider '{identity}' has no {INVARIANT_NAME}",
            details={"provider": str(identity)}
        )
    return str(invariant_name)
