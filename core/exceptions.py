"""
Exception hierarchy for the library registry.
"""

from pathlib import Path
from typing import Optional


class LibraryError(Exception):
    """Base class for all registry errors."""


class AlreadyInitializedError(LibraryError):
    """Raised when the process-wide registry is initialized twice."""


class RegistryNotInitializedError(LibraryError):
    """Raised when the process-wide registry is requested before initialize."""


class ConfigParseError(LibraryError):
    """Raised when a configuration file cannot be turned into libraries."""

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path


class UnknownLibraryTypeError(LibraryError):
    """Raised when a declaration names a type tag nobody registered."""

    def __init__(self, type_tag: str):
        super().__init__(f"Unknown library type: {type_tag}")
        self.type_tag = type_tag


class LibraryLoadError(LibraryError):
    """Raised by library implementations when load cannot complete."""


class NoSuchRealmError(LibraryError):
    """Raised when an identity manager is requested for an unknown name."""

    def __init__(self, realm: str):
        super().__init__(f"No realm connector with this name: {realm}")
        self.realm = realm


class NotARealmConnectorError(LibraryError):
    """Raised when the named library does not expose the identity capability."""

    def __init__(self, realm: str):
        super().__init__(f"This is not a realm connector: {realm}")
        self.realm = realm
