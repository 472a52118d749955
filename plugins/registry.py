"""
Type registry mapping library type tags to their constructors.
"""

import importlib
import logging
import threading
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from core.exceptions import UnknownLibraryTypeError
from interfaces import ILibrary, LibraryState

logger = logging.getLogger(__name__)

# Called as constructor(name=..., options=..., data_directory=...)
LibraryConstructor = Callable[..., ILibrary]


class LibraryTypeRegistry:
    """Registry of library types and factory for their instances."""

    def __init__(self, discover: bool = True):
        """
        Initialize the type registry.

        Args:
            discover: Register the built-in library types
        """
        self._constructors: Dict[str, LibraryConstructor] = {}
        self._descriptions: Dict[str, str] = {}
        self._lock = threading.Lock()
        self._manager: Optional[Any] = None

        if discover:
            self._discover_plugins()

    def _discover_plugins(self) -> None:
        """Register the library types shipped with the package."""
        try:
            self._discover_library_plugins()
            logger.info("Library type discovery completed")
        except Exception as e:
            logger.warning(f"Library type discovery failed: {e}")

    def _discover_library_plugins(self) -> None:
        builtin_types = {
            'properties': 'plugins.library.properties_plugin',
            'directory': 'plugins.library.directory_plugin',
            'static_realm': 'plugins.library.static_realm_plugin',
        }

        for type_tag, module_path in builtin_types.items():
            try:
                module = importlib.import_module(module_path)
                library_class = module.LIBRARY_CLASS
                self.register_type(type_tag, library_class,
                                   getattr(library_class, 'description', ''))
            except ImportError:
                logger.debug(f"Library type not available: {type_tag}")
            except Exception as e:
                logger.warning(f"Failed to register library type {type_tag}: {e}")

    def register_type(self, type_tag: str, constructor: LibraryConstructor,
                      description: str = "") -> None:
        """
        Register a constructor under a type tag, replacing any previous one.

        Args:
            type_tag: Tag used in the "type" field of declarations
            constructor: Callable building an ILibrary
            description: Human readable description
        """
        if not type_tag:
            raise ValueError("Library type tag must not be empty")
        with self._lock:
            self._constructors[type_tag] = constructor
            self._descriptions[type_tag] = description
        logger.debug(f"Registered library type: {type_tag}")

    def unregister_type(self, type_tag: str) -> bool:
        """
        Remove a type tag.

        Returns:
            True if the tag was registered
        """
        with self._lock:
            self._descriptions.pop(type_tag, None)
            return self._constructors.pop(type_tag, None) is not None

    def has_type(self, type_tag: str) -> bool:
        with self._lock:
            return type_tag in self._constructors

    def list_types(self) -> Dict[str, str]:
        """
        List registered types.

        Returns:
            Dictionary of type tag to description, sorted by tag
        """
        with self._lock:
            return {tag: self._descriptions[tag] for tag in sorted(self._constructors)}

    def attach(self, manager: Any) -> None:
        """Bind the library registry whose data directory new instances receive."""
        self._manager = manager

    def detach(self, manager: Any) -> None:
        if self._manager is manager:
            self._manager = None

    @property
    def data_directory(self) -> Optional[Path]:
        return self._manager.data_directory if self._manager is not None else None

    def create(self, type_tag: str, name: str, options: Optional[Dict[str, Any]] = None) -> ILibrary:
        """
        Create a library instance.

        Args:
            type_tag: Registered type tag
            name: Library name from the configuration file
            options: Declaration fields other than "type"

        Returns:
            A new, unloaded library instance

        Raises:
            UnknownLibraryTypeError: If no constructor is registered for the tag
        """
        with self._lock:
            constructor = self._constructors.get(type_tag)
        if constructor is None:
            raise UnknownLibraryTypeError(type_tag)

        library = constructor(name=name, options=dict(options or {}),
                              data_directory=self.data_directory)
        library.name = name
        library.type_tag = type_tag
        library.state = LibraryState.UNLOADED
        return library
