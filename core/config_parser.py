"""
Configuration file parser turning library declarations into instances.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

from core.exceptions import ConfigParseError, UnknownLibraryTypeError
from interfaces import ILibrary
from plugins.registry import LibraryTypeRegistry

logger = logging.getLogger(__name__)


class LibraryConfigParser:
    """
    Parser for library configuration files.

    A configuration file is a JSON object whose "library" field maps library
    names to declarations::

        {"library": {"users": {"type": "static_realm", "users": {...}}}}

    The "type" field selects the constructor; all other fields are passed to
    it as options. A file fails as a whole: if any declaration cannot be built,
    no instance from that file is returned.
    """

    LIBRARY_FIELD = "library"
    TYPE_FIELD = "type"

    def __init__(self, type_registry: LibraryTypeRegistry):
        self.type_registry = type_registry

    def parse_file(self, path: Path) -> Dict[str, ILibrary]:
        """
        Read and parse a configuration file.

        Args:
            path: Configuration file path

        Returns:
            Mapping of library name to new, unloaded instance. Empty when the
            file declares no library.

        Raises:
            ConfigParseError: If the file cannot be read or is malformed
        """
        try:
            text = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigParseError(f"Cannot read configuration file {path}: {e}", path) from e
        return self.parse(text, path)

    def parse(self, text: str, path: Optional[Path] = None) -> Dict[str, ILibrary]:
        """Parse configuration text; see parse_file."""
        source = path or "<string>"
        try:
            document = json.loads(text)
        except json.JSONDecodeError as e:
            raise ConfigParseError(f"Invalid JSON in {source}: {e}", path) from e

        if document is None:
            return {}
        if not isinstance(document, dict):
            raise ConfigParseError(f"Configuration {source} must be a JSON object", path)

        declarations = document.get(self.LIBRARY_FIELD)
        if declarations is None:
            return {}
        if not isinstance(declarations, dict):
            raise ConfigParseError(
                f"Field '{self.LIBRARY_FIELD}' of {source} must be a JSON object", path)

        libraries: Dict[str, ILibrary] = {}
        try:
            for name, declaration in declarations.items():
                libraries[name] = self._create_library(name, declaration, source, path)
        except ConfigParseError:
            _discard(libraries.values())
            raise
        return libraries

    def _create_library(self, name: str, declaration: Any, source: Any,
                        path: Optional[Path]) -> ILibrary:
        if not isinstance(declaration, dict):
            raise ConfigParseError(f"Declaration of library {name} in {source} must be an object", path)

        type_tag = declaration.get(self.TYPE_FIELD)
        if not isinstance(type_tag, str) or not type_tag:
            raise ConfigParseError(f"Library {name} in {source} has no '{self.TYPE_FIELD}'", path)

        options = {key: value for key, value in declaration.items() if key != self.TYPE_FIELD}
        try:
            return self.type_registry.create(type_tag, name, options)
        except UnknownLibraryTypeError as e:
            raise ConfigParseError(f"Library {name} in {source}: {e}", path) from e
        except Exception as e:
            raise ConfigParseError(f"Cannot create library {name} in {source}: {e}", path) from e


def _discard(libraries: Iterable[ILibrary]) -> None:
    """Close instances built before a later declaration failed."""
    for library in libraries:
        try:
            library.close()
        except Exception as e:
            logger.warning(f"Failed to discard library {library.name}: {e}")
