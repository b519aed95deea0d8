from enum import Enum
from pathlib import PurePosixPath, PureWindowsPath
from typing import List, Optional, Set
from pydantic import BaseModel, ConfigDict, Field


class GenerationMode(str, Enum):
    DATABASE_FIRST_FROM_EDMX = "DatabaseFirstFromEdmx"
    CODE_FIRST_FROM_DATABASE = "CodeFirstFromDatabase"


def _pure_path(*paths: str):
    """Pick the path flavour from the strings themselves, not the host OS."""
    for path in paths:
        if "\\" in path or (len(path) > 1 and path[1] == ":"):
            return PureWindowsPath
    return PurePosixPath


class ModelLocation(BaseModel):
    """Where the model file lives inside the project."""
    model_config = ConfigDict(frozen=True, protected_namespaces=())

    model_path: str
    project_root: str
    # Precomputed by the project system when it knows the resource namespace
    qualified_name: Optional[str] = None

    def resource_name(self) -> str:
        """
        Name of the model's embedded resources, without extension.

        A model directly under the project root is named after its file stem.
        Nested models get the folders in between prepended with dots
        (``Folder/Sub/myModel.edmx`` -> ``Folder.Sub.myModel``).
        """
        if self.qualified_name:
            return self.qualified_name

        path_cls = _pure_path(self.model_path, self.project_root)
        model = path_cls(self.model_path)
        try:
            relative = model.relative_to(path_cls(self.project_root))
        except ValueError:
            return model.stem

        return ".".join([*relative.parent.parts, model.stem])


class ConnectionStringEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    connection_string: str = ""
    provider_name: Optional[str] = None


class ConfigDocument(BaseModel):
    """Parsed ``connectionStrings`` section of an application config file."""
    model_config = ConfigDict(frozen=True)

    entries: List[ConnectionStringEntry] = Field(default_factory=list)

    @property
    def names(self) -> Set[str]:
        return {entry.name for entry in self.entries}

    def is_empty(self) -> bool:
        return not self.entries

    def get(self, name: str) -> Optional[ConnectionStringEntry]:
        for entry in self.entries:
            if entry.name == name:
                return entry
        return None
