"""
Application configuration file loader.
Reads the connectionStrings section of an XML application configuration (App.config / Web.config).
"""
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Dict, Optional, Union
import structlog

from services.common.exceptions import ConfigurationError
from services.wizard.models import ConfigDocument, ConnectionStringEntry

logger = structlog.get_logger()


def _local_name(tag: str) -> str:
    # Strip "{namespace}" so namespaced config files parse the same way
    return tag.rsplit("}", 1)[-1]


def parse_config_xml(xml_text: Union[str, bytes]) -> ConfigDocument:
    """
    Parse connection string entries out of configuration XML.

    Pass bytes to let the parser honour the BOM and the encoding declaration.

    ``<add>``, ``<remove>`` and ``<clear>`` are applied in document order.
    Entries without a ``name`` attribute are skipped.

    Raises:
        ConfigurationError: If the XML is malformed
    """
    try:
        root = ET.fromstring(xml_text)
    except (ET.ParseError, ValueError, LookupError) as e:
        raise ConfigurationError(f"Malformed configuration XML: {e}") from e

    entries: Dict[str, ConnectionStringEntry] = {}
    sections = [root] if _local_name(root.tag) == "connectionStrings" else [
        child for child in root if _local_name(child.tag) == "connectionStrings"
    ]

    for section in sections:
        for element in section:
            tag = _local_name(element.tag)
            name = element.get("name")
            if tag == "clear":
                entries.clear()
            elif tag == "remove" and name is not None:
                entries.pop(name, None)
            elif tag == "add" and name is not None:
                # Later duplicates replace earlier ones
                entries.pop(name, None)
                entries[name] = ConnectionStringEntry(
                    name=name,
                    connection_string=element.get("connectionString", ""),
                    provider_name=element.get("providerName"),
                )

    return ConfigDocument(entries=list(entries.values()))


class ConfigFileLoader:
    """Loads a ConfigDocument from an XML file on disk."""

    def __init__(self, path: Optional[Union[str, Path]]):
        self.path = Path(path) if path else None

    def load(self) -> Optional[ConfigDocument]:
        """
        Load the configuration document.

        Returns:
            The parsed document, or None if no configuration file exists yet

        Raises:
            ConfigurationError: If the file exists but cannot be read or parsed
        """
        if self.path is None or not self.path.is_file():
            logger.info("app_config_not_found", path=str(self.path) if self.path else None)
            return None

        try:
            xml_bytes = self.path.read_bytes()
        except OSError as e:
            logger.error("app_config_read_error", path=str(self.path), error=str(e))
            raise ConfigurationError(
                f"Failed to read configuration file at {self.path}: {e}",
                details={"path": str(self.path)}
            ) from e

        try:
            document = parse_config_xml(xml_bytes)
        except ConfigurationError as e:
            logger.error("app_config_parse_error", path=str(self.path), error=str(e))
            e.details.setdefault("path", str(self.path))
            raise

        logger.debug("app_config_loaded", path=str(self.path), entries=len(document.entries))
        return document
