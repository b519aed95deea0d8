"""
Unique connection string names.
Proposes a connection string name that is not already declared in the application configuration.
"""
from itertools import count
from typing import Iterable, Optional, Protocol
import structlog

from services.common.exceptions import ConfigurationError
from services.wizard.models import ConfigDocument

logger = structlog.get_logger()


class ConfigDocumentLoader(Protocol):
    def load(self) -> Optional[ConfigDocument]: ...


def first_free_name(candidate_name: str, existing_names: Iterable[str]) -> str:
    """
    Return candidate_name, or candidate_name followed by the smallest positive
    integer that does not collide with existing_names.
    """
    used = set(existing_names)
    if candidate_name not in used:
        return candidate_name
    # Terminates: at most len(used) suffixes can be taken
    for suffix in count(1):
        name = f"{candidate_name}{suffix}"
        if name not in used:
            return name


def resolve_unique_name(candidate_name: str, config_document: Optional[ConfigDocument]) -> str:
    """
    Make candidate_name unique among the connection strings of config_document.

    Names are compared case-sensitively. A missing or empty document leaves the
    candidate unchanged.
    """
    if config_document is None or config_document.is_empty():
        return candidate_name
    return first_free_name(candidate_name, config_document.names)


class UniqueNameResolver:
    """Resolves names against the document provided by a config loader."""

    def __init__(self, config_loader: Optional[ConfigDocumentLoader]):
        self.config_loader = config_loader

    def resolve(self, candidate_name: str) -> str:
        """Resolve candidate_name; an unreadable config counts as having no names."""
        document = None
        if self.config_loader is not None:
            try:
                document = self.config_loader.load()
            except ConfigurationError as e:
                logger.warning("app_config_unreadable", error=str(e), details=e.details)
        name = resolve_unique_name(candidate_name, document)
        logger.info(
            "connection_string_name_resolved",
            candidate=candidate_name,
            name=name,
            existing=len(document.entries) if document is not None else 0,
        )
        return name
