"""
Abstract interface for library instances managed by the registry.
"""

from abc import ABC, abstractmethod
from enum import Enum


class LibraryState(Enum):
    """Lifecycle states of a library instance."""

    UNLOADED = "unloaded"
    LOADED = "loaded"
    ERROR = "error"
    CLOSED = "closed"


class ILibrary(ABC):
    """Abstract interface for a named, pluggable library."""

    # Stamped by the type registry when the instance is created
    name: str = ""
    type_tag: str = ""
    # Maintained by the library registry
    state: LibraryState = LibraryState.UNLOADED

    @abstractmethod
    def load(self) -> None:
        """
        Acquire the resources the library needs to serve requests.

        Raises:
            Exception: Any failure; the registry logs it and keeps the entry
        """
        raise NotImplementedError("load method must be implemented by concrete classes")

    @abstractmethod
    def close(self) -> None:
        """Release every resource acquired by load."""
        raise NotImplementedError("close method must be implemented by concrete classes")
