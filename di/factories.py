"""
Component factories for creating the registry and its collaborators.
"""

from pathlib import Path
from typing import Optional

from config.settings import Settings, settings
from core.config_parser import LibraryConfigParser
from core.file_tracker import FileTracker
from core.library_registry import LibraryRegistry
from interfaces import IChangeSource
from plugins.registry import LibraryTypeRegistry
from utils.helpers import ensure_directory
from .container import DIContainer


class ComponentFactory:
    """Factory for creating component implementations."""

    def __init__(self, config: Optional[Settings] = None):
        """
        Initialize component factory.

        Args:
            config: Settings to build from, the global settings by default
        """
        self.config = config or settings

    def create_type_registry(self) -> LibraryTypeRegistry:
        """Create the library type registry with the built-in types."""
        return LibraryTypeRegistry()

    def create_change_source(self) -> IChangeSource:
        """Create the tracker watching the configuration directory."""
        return FileTracker(Path(self.config.LIBRARY_ETC_DIR), self.config.LIBRARY_POLL_INTERVAL)

    def create_config_parser(self, type_registry: LibraryTypeRegistry) -> LibraryConfigParser:
        return LibraryConfigParser(type_registry)

    def create_library_registry(self, change_source: IChangeSource,
                                type_registry: LibraryTypeRegistry,
                                parser: LibraryConfigParser) -> LibraryRegistry:
        """Create the library registry subscribed to the change source."""
        data_directory = ensure_directory(self.config.LIBRARY_DATA_DIR)
        return LibraryRegistry(data_directory, change_source, type_registry, parser,
                               self.config.LIBRARY_FILE_EXTENSION)

    def build_container(self) -> DIContainer:
        """
        Register every component in a new container.

        Returns:
            Container resolving LibraryTypeRegistry, IChangeSource,
            LibraryConfigParser and LibraryRegistry
        """
        container = DIContainer()
        container.register_factory(LibraryTypeRegistry, self.create_type_registry)
        container.register_factory(IChangeSource, self.create_change_source)
        container.register_factory(
            LibraryConfigParser,
            lambda: self.create_config_parser(container.resolve(LibraryTypeRegistry)))
        container.register_factory(
            LibraryRegistry,
            lambda: self.create_library_registry(container.resolve(IChangeSource),
                                                 container.resolve(LibraryTypeRegistry),
                                                 container.resolve(LibraryConfigParser)))
        return container
