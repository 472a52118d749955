"""
Hot-reloadable registry of named libraries declared in configuration files.
"""

import logging
import threading
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional

from config.settings import settings
from core.config_parser import LibraryConfigParser
from core.exceptions import (
    AlreadyInitializedError,
    ConfigParseError,
    NoSuchRealmError,
    NotARealmConnectorError,
    RegistryNotInitializedError,
)
from interfaces import ChangeReason, IChangeSource, IIdentityManager, ILibrary, LibraryState
from plugins.registry import LibraryTypeRegistry
from utils.locks import ReadWriteLock

logger = logging.getLogger(__name__)


class LibraryRegistry:
    """
    Registry merging the libraries of every configuration file into one namespace.

    Each configuration file contributes a per-file map of library name to
    instance. The per-file maps are merged into a read-only global map which is
    the only state lookups see. File events are applied one at a time; the
    global map is swapped in a single assignment under the exclusive side of a
    read-write lock, so readers see either the map before or after an event.
    Library load() and close() calls run outside that lock.
    """

    def __init__(self, data_directory: Path,
                 change_source: Optional[IChangeSource] = None,
                 type_registry: Optional[LibraryTypeRegistry] = None,
                 parser: Optional[LibraryConfigParser] = None,
                 file_extension: Optional[str] = None):
        """
        Initialize the registry and subscribe it to its collaborators.

        Args:
            data_directory: Directory handed to library constructors
            change_source: Source of configuration file events
            type_registry: Type tag to constructor table
            parser: Configuration parser, built on type_registry by default
            file_extension: Extension of configuration files, "json" by default
        """
        self._data_directory = Path(data_directory)
        self.change_source = change_source
        self.type_registry = type_registry or LibraryTypeRegistry()
        self.parser = parser or LibraryConfigParser(self.type_registry)
        self.file_extension = (file_extension or settings.LIBRARY_FILE_EXTENSION).lstrip('.').lower()

        self._map_lock = ReadWriteLock()
        # Serializes writers; held across parse, load and close
        self._write_mutex = threading.Lock()
        self._library_file_map: Dict[Path, Dict[str, ILibrary]] = {}
        self._libraries: Mapping[str, ILibrary] = MappingProxyType({})
        self._closed = False

        self.type_registry.attach(self)
        if self.change_source is not None:
            self.change_source.register(self.on_file_event)

    @property
    def data_directory(self) -> Path:
        return self._data_directory

    def __enter__(self) -> "LibraryRegistry":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def _check_changes(self) -> None:
        if self.change_source is not None:
            self.change_source.check()

    def get_library(self, name: str) -> Optional[ILibrary]:
        """
        Look up a library by name.

        Args:
            name: Library name

        Returns:
            The library instance, or None if no file declares it
        """
        self._check_changes()
        with self._map_lock.read():
            return self._libraries.get(name)

    def list_libraries(self) -> Dict[str, str]:
        """
        Snapshot of the registered libraries.

        Returns:
            Dictionary of library name to type tag, sorted by name
        """
        self._check_changes()
        with self._map_lock.read():
            libraries = self._libraries
        return {name: libraries[name].type_tag for name in sorted(libraries)}

    def get_library_state(self, name: str) -> Optional[LibraryState]:
        library = self.get_library(name)
        return library.state if library is not None else None

    def get_identity_manager(self, realm: str) -> IIdentityManager:
        """
        Look up a realm connector.

        Args:
            realm: Library name

        Returns:
            The library's identity manager capability

        Raises:
            NoSuchRealmError: If no library has this name
            NotARealmConnectorError: If the library is not an identity manager
        """
        library = self.get_library(realm)
        if library is None:
            raise NoSuchRealmError(realm)
        if not isinstance(library, IIdentityManager):
            raise NotARealmConnectorError(realm)
        return library

    def tracked_files(self) -> List[Path]:
        with self._map_lock.read():
            return sorted(self._library_file_map)

    # ------------------------------------------------------------------
    # File events
    # ------------------------------------------------------------------

    def on_file_event(self, reason: ChangeReason, path: Path) -> None:
        """
        Apply a configuration file change.

        Files without the configuration extension are ignored.

        Args:
            reason: UPDATED (created or modified) or DELETED
            path: Changed file
        """
        path = Path(path).absolute()
        if _extension(path).lower() != self.file_extension:
            return
        logger.debug(f"Library configuration event {reason.value}: {path}")

        if reason is ChangeReason.UPDATED:
            self._load_library_set(path)
        elif reason is ChangeReason.DELETED:
            with self._write_mutex:
                if not self._closed:
                    self._unload_library_set(path)

    def _load_library_set(self, path: Path) -> None:
        with self._write_mutex:
            if self._closed:
                return
            try:
                libraries = self.parser.parse_file(path)
            except ConfigParseError as e:
                logger.error(f"Failed to parse library configuration file {path}: {e}")
                return

            if not libraries:
                self._unload_library_set(path)
                return

            logger.info(f"Load library configuration file: {path}")
            self._load_libraries(path, libraries)

            with self._map_lock.write():
                previous = self._library_file_map.get(path, {})
                self._library_file_map[path] = libraries
                self._build_global_map()
                released = self._untracked(previous.values())

            self._close_libraries(released)

    def _unload_library_set(self, path: Path) -> None:
        with self._map_lock.write():
            removed = self._library_file_map.pop(path, None)
            if removed is None:
                return
            self._build_global_map()
            released = self._untracked(removed.values())

        logger.info(f"Unload library configuration file: {path}")
        self._close_libraries(released)

    def _build_global_map(self) -> None:
        """Merge the per-file maps; later paths in sorted order win collisions."""
        libraries: Dict[str, ILibrary] = {}
        owners: Dict[str, Path] = {}
        for path in sorted(self._library_file_map):
            for name, library in self._library_file_map[path].items():
                if name in owners:
                    logger.warning(f"Library {name} from {owners[name]} is shadowed by {path}")
                libraries[name] = library
                owners[name] = path
        self._libraries = MappingProxyType(libraries)

    def _untracked(self, libraries: Iterable[ILibrary]) -> List[ILibrary]:
        tracked = {id(library) for file_map in self._library_file_map.values()
                   for library in file_map.values()}
        return [library for library in libraries if id(library) not in tracked]

    def _load_libraries(self, path: Path, libraries: Mapping[str, ILibrary]) -> None:
        for name, library in libraries.items():
            try:
                library.load()
                library.state = LibraryState.LOADED
            except Exception as e:
                library.state = LibraryState.ERROR
                logger.error(f"Failed to load library {name} from {path}: {e}", exc_info=True)

    def _close_libraries(self, libraries: Iterable[ILibrary]) -> None:
        for library in libraries:
            try:
                library.close()
                library.state = LibraryState.CLOSED
            except Exception as e:
                library.state = LibraryState.ERROR
                logger.error(f"Failed to close library {library.name}: {e}", exc_info=True)

    # ------------------------------------------------------------------
    # Shutdown
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Close every tracked library and stop reacting to file events."""
        with self._write_mutex:
            if self.change_source is not None:
                self.change_source.unregister(self.on_file_event)
            self.type_registry.detach(self)
            self._closed = True

            with self._map_lock.write():
                libraries = [library for file_map in self._library_file_map.values()
                             for library in file_map.values()]
                self._library_file_map.clear()
                self._libraries = MappingProxyType({})

            if libraries:
                logger.info(f"Closing {len(libraries)} libraries")
            self._close_libraries(libraries)


def _extension(path: Path) -> str:
    """Text after the last dot of the file name, so ".json" has extension "json"."""
    name = path.name
    return name.rsplit('.', 1)[1] if '.' in name else ''


# --- Global Instance ---
_instance: Optional[LibraryRegistry] = None
_instance_lock = threading.Lock()


def initialize(data_directory: Path, change_source: Optional[IChangeSource] = None,
               type_registry: Optional[LibraryTypeRegistry] = None) -> LibraryRegistry:
    """
    Create the process-wide library registry.

    Raises:
        AlreadyInitializedError: If the registry already exists
    """
    global _instance
    with _instance_lock:
        if _instance is not None:
            raise AlreadyInitializedError("Library registry already initialized")
        _instance = LibraryRegistry(data_directory, change_source, type_registry)
        logger.info(f"Library registry initialized with data directory {data_directory}")
        return _instance


def get_registry() -> LibraryRegistry:
    if _instance is None:
        raise RegistryNotInitializedError("Library registry is not initialized")
    return _instance


def shutdown() -> None:
    """Close and forget the process-wide registry, if any."""
    global _instance
    with _instance_lock:
        registry, _instance = _instance, None
    if registry is not None:
        registry.close()
