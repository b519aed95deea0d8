"""
Pytest configuration for unit tests.
"""
import pytest
import sys
import os
from uuid import UUID

# Ensure project root is in python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from config.configuration import ConfigLoader
from services.infrastructure.provider_registry import InMemoryProviderRegistry, RegisteredProvider

PROVIDER_GUID = UUID("42424242-4242-4242-4242-424242424242")

UNIQUIFY_CONFIG_XML = r"""<configuration>
  <connectionStrings>
    <add name="myModel" connectionString="Data Source=(localdb)\v11.0;" providerName="System.Data.SqlClient" />
    <add name="myModel1" connectionString="metadata=res://*;" providerName="System.Data.EntityClient" />
    <add name="myModel2" connectionString="metadata=res://*;" providerName="System.Data.SqlCe" />
  </connectionStrings>
</configuration>"""


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Every test starts from default configuration, unaffected by the developer's environment."""
    for var in ("GENERATION_MODE", "APP_CONFIG_PATH", "LOG_LEVEL", "LOG_JSON"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("WIZARD_CONFIG_PATH", str(tmp_path / "missing.yaml"))
    ConfigLoader.reset()
    yield
    ConfigLoader.reset()


@pytest.fixture
def provider_registry():
    """Registry with SqlClient registered under PROVIDER_GUID."""
    return InMemoryProviderRegistry({
        PROVIDER_GUID: RegisteredProvider(PROVIDER_GUID, {"InvariantName": "System.Data.SqlClient"})
    })


@pytest.fixture
def app_config_file(tmp_path):
    """App.config declaring myModel, myModel1 and myModel2."""
    path = tmp_path / "App.config"
    path.write_text(UNIQUIFY_CONFIG_XML, encoding="utf-8")
    return path
