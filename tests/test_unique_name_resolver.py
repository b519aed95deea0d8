"""
Unit tests for unique connection string names.
"""
import pytest
from unittest.mock import MagicMock
from services.wizard.models import ConfigDocument, ConnectionStringEntry
from services.wizard.unique_name_resolver import UniqueNameResolver, first_free_name, resolve_unique_name
from services.infrastructure.config_file_loader import ConfigFileLoader, parse_config_xml
from services.common.exceptions import ConfigurationError


def document(*names):
    return ConfigDocument(entries=[ConnectionStringEntry(name=n) for n in names])


class TestResolveUniqueName:
    def test_missing_document(self):
        """No config file yet: the candidate is used as is."""
        assert resolve_unique_name("myModel", None) == "myModel"

    def test_document_without_connection_strings(self):
        assert resolve_unique_name("myModel", parse_config_xml("<configuration />")) == "myModel"

    def test_uniquifies_proposed_name(self, app_config_file):
        """myModel, myModel1 and myModel2 are taken."""
        doc = parse_config_xml(app_config_file.read_text(encoding="utf-8"))
        assert resolve_unique_name("myModel", doc) == "myModel3"

    def test_free_name_is_fixed_point(self):
        doc = document("myModel", "Other")
        assert resolve_unique_name("Northwind", doc) == "Northwind"

    def test_first_gap_is_reused(self):
        """myModel1 is free even though myModel2 is taken."""
        assert resolve_unique_name("myModel", document("myModel", "myModel2")) == "myModel1"

    def test_case_sensitive(self):
        """Names differing only by case do not collide."""
        assert resolve_unique_name("myModel", document("MYMODEL", "mymodel")) == "myModel"
        assert resolve_unique_name("myModel", document("myModel", "MyModel1")) == "myModel1"

    def test_suffix_beyond_nine(self):
        names = ["Db"] + [f"Db{i}" for i in range(1, 12)]
        assert resolve_unique_name("Db", document(*names)) == "Db12"

    @pytest.mark.parametrize("order", [
        ["myModel", "myModel1", "myModel2"],
        ["myModel2", "myModel", "myModel1"],
        ["myModel1", "myModel2", "myModel"],
    ])
    def test_iteration_order_irrelevant(self, order):
        assert first_free_name("myModel", order) == "myModel3"
        assert first_free_name("myModel", iter(order)) == "myModel3"


class TestUniqueNameResolver:
    def test_uses_loader(self):
        loader = MagicMock()
        loader.load.return_value = document("myModel")
        assert UniqueNameResolver(loader).resolve("myModel") == "myModel1"
        loader.load.assert_called_once()

    def test_loader_returns_none(self):
        loader = MagicMock()
        loader.load.return_value = None
        assert UniqueNameResolver(loader).resolve("myModel") == "myModel"

    def test_no_loader(self):
        assert UniqueNameResolver(None).resolve("myModel") == "myModel"

    def test_malformed_config_file(self, tmp_path):
        """An unreadable config file is treated as having no names."""
        path = tmp_path / "App.config"
        path.write_text("<configuration><connectionStrings>", encoding="utf-8")
        assert UniqueNameResolver(ConfigFileLoader(path)).resolve("myModel") == "myModel"

    def test_loader_raises_configuration_error(self):
        loader = MagicMock()
        loader.load.side_effect = ConfigurationError("broken", details={"path": "App.config"})
        assert UniqueNameResolver(loader).resolve("myModel") == "myModel"

    def test_windows_1252_config_file(self, tmp_path):
        path = tmp_path / "App.config"
        path.write_bytes(
            '<?xml version="1.0" encoding="windows-1252"?>'
            '<configuration><connectionStrings>'
            '<add name="myModel" connectionString="Data Source=café" />'
            '</connectionStrings></configuration>'.encode("cp1252")
        )
        assert UniqueNameResolver(ConfigFileLoader(path)).resolve("myModel") == "myModel1"
