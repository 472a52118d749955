"""
Key/value properties library.
"""

from pathlib import Path
from typing import Any, Dict, Optional

from interfaces import ILibrary


class PropertiesLibrary(ILibrary):
    """Library exposing a read-only set of properties."""

    description = "Static key/value properties"

    def __init__(self, name: str, options: Dict[str, Any], data_directory: Optional[Path] = None):
        properties = options.get("properties", {})
        if not isinstance(properties, dict):
            raise ValueError(f"'properties' of library {name} must be an object")
        self.name = name
        self._declared = dict(properties)
        self._properties: Dict[str, Any] = {}

    def load(self) -> None:
        self._properties = dict(self._declared)

    def close(self) -> None:
        self._properties = {}

    def get(self, key: str, default: Any = None) -> Any:
        return self._properties.get(key, default)

    def as_dict(self) -> Dict[str, Any]:
        return dict(self._properties)


LIBRARY_CLASS = PropertiesLibrary
