"""
Tests for the MCP tool functions.
"""
import pytest
from uuid import UUID
from config.configuration import SQL_CLIENT_PROVIDER_GUID


@pytest.fixture
def server():
    import server
    return server


def test_build_connection_string_database_first(server):
    result = server.build_connection_string(
        provider=str(SQL_CLIENT_PROVIDER_GUID),
        provider_connection_string="Integrated Security=SSPI",
        mode="DatabaseFirstFromEdmx",
        model_path=r"C:\Project\myModel.edmx",
        project_root=r"C:\Project"
    )
    assert result["mode"] == "DatabaseFirstFromEdmx"
    assert result["connection_string"] == (
        "metadata=res://*/myModel.csdl|res://*/myModel.ssdl|res://*/myModel.msl;"
        "provider=System.Data.SqlClient;"
        'provider connection string="Integrated Security=SSPI"'
    )


def test_build_connection_string_code_first(server):
    result = server.build_connection_string(
        provider=str(UUID(int=9)),
        provider_connection_string="Data Source=.",
        mode="CodeFirstFromDatabase"
    )
    assert result == {"mode": "CodeFirstFromDatabase", "connection_string": "Data Source=."}


def test_build_connection_string_unknown_provider(server):
    result = server.build_connection_string(
        provider=str(UUID(int=9)),
        provider_connection_string="Data Source=.",
        mode="DatabaseFirstFromEdmx",
        model_path="/p/myModel.edmx",
        project_root="/p"
    )
    assert result["error"] == "ProviderNotFoundError"
    assert result["details"]["provider"] == str(UUID(int=9))


def test_build_connection_string_invalid_mode(server):
    result = server.build_connection_string(
        provider=str(SQL_CLIENT_PROVIDER_GUID),
        provider_connection_string="Data Source=.",
        mode="ModelFirst"
    )
    assert result["error"] == "ValidationError"


def test_propose_connection_string_name(server, app_config_file):
    assert server.propose_connection_string_name("myModel", str(app_config_file)) == {"name": "myModel3"}


def test_propose_connection_string_name_empty(server):
    assert server.propose_connection_string_name("")["error"] == "ValidationError"


def test_config_info(server):
    info = server.config_info()
    assert info["providers"][0]["invariant_name"] == "System.Data.SqlClient"
