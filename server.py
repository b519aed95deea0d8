"""
Model Wizard Connection MCP
"""
import sys
from typing import Dict, Any, Optional

from mcp.server.fastmcp import FastMCP  # type: ignore[import-untyped]
from config.configuration import get_config
from services.common.exceptions import WizardError
from services.common.logging import configure_logging
from services.infrastructure.config_file_loader import ConfigFileLoader
from services.wizard.db_config_service import DbConfigService
from services.wizard.models import GenerationMode, ModelLocation

# Load Config
try:
    config = get_config()
except WizardError as e:
    print(f"FATAL: Config load failed: {e}", file=sys.stderr)
    sys.exit(1)

configure_logging(log_level=config.server.log_level, json_format=config.server.json_logs)

mcp = FastMCP("model-wizard-connection")


def _error(e: WizardError) -> Dict[str, Any]:
    return {"error": type(e).__name__, "message": str(e), "details": e.details}


@mcp.tool()
def build_connection_string(
    provider: str,
    provider_connection_string: str,
    mode: Optional[str] = None,
    model_path: Optional[str] = None,
    project_root: Optional[str] = None,
    model_name: Optional[str] = None
) -> Dict[str, Any]:
    """
    Build the connection string the wizard shows for a data provider.

    Args:
        provider: GUID of the registered data provider.
        provider_connection_string: Raw provider connection string, e.g. "Integrated Security=SSPI".
        mode: DatabaseFirstFromEdmx (default from config) or CodeFirstFromDatabase.
        model_path: Absolute path of the .edmx file (DatabaseFirstFromEdmx only).
        project_root: Root folder of the project containing the model.
        model_name: Namespace-qualified model name, if already known (e.g. "Folder.myModel").
    """
    try:
        location = None
        if model_path:
            location = ModelLocation(
                model_path=model_path,
                project_root=project_root or "",
                qualified_name=model_name
            )
        service = DbConfigService(
            mode=GenerationMode(mode) if mode else None,
            model_location=location
        )
        return {
            "mode": service.mode.value,
            "connection_string": service.get_connection_string(provider, provider_connection_string)
        }
    except ValueError as e:
        return {"error": "ValidationError", "message": str(e), "details": {"mode": mode}}
    except WizardError as e:
        return _error(e)


@mcp.tool()
def propose_connection_string_name(candidate_name: str, app_config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Propose a connection string name not yet used in the application config file.

    Args:
        candidate_name: Preferred name, usually the model name.
        app_config_path: Optional App.config/Web.config path (defaults to configuration).
    """
    try:
        loader = ConfigFileLoader(app_config_path) if app_config_path else None
        service = DbConfigService(config_loader=loader)
        return {"name": service.get_unique_connection_string_name(candidate_name)}
    except WizardError as e:
        return _error(e)


@mcp.tool()
def config_info() -> Dict[str, Any]:
    """Return public configuration settings."""
    return {
        "generation_mode": config.generation_mode.value,
        "app_config_path": config.app_config_path,
        "providers": [
            {"guid": str(p.guid), "invariant_name": p.invariant_name, "display_name": p.display_name}
            for p in config.providers
        ],
        "decorate_sql_client": config.entity_framework.decorate_sql_client
    }


if __name__ == "__main__":
    print(f"Starting Model Wizard Connection MCP ({config.server.transport})", file=sys.stderr)
    mcp.run(transport=config.server.transport)
