"""
Working directory library.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

from core.exceptions import LibraryLoadError
from interfaces import ILibrary

logger = logging.getLogger(__name__)


class DirectoryLibrary(ILibrary):
    """Library owning a working directory below the registry data directory."""

    description = "Working directory under the data directory"

    def __init__(self, name: str, options: Dict[str, Any], data_directory: Optional[Path] = None):
        """
        Args:
            name: Library name
            options: Optional "path" (relative to the data directory, defaults
                to the library name) and "create" (default True)
            data_directory: Registry data directory
        """
        relative = options.get("path", name)
        if not isinstance(relative, str) or not relative:
            raise ValueError(f"'path' of library {name} must be a non-empty string")
        if Path(relative).is_absolute() or ".." in Path(relative).parts:
            raise ValueError(f"'path' of library {name} must stay inside the data directory")

        self.name = name
        self.create = bool(options.get("create", True))
        self.path = (data_directory or Path(".")) / relative
        self.ready = False

    def load(self) -> None:
        if not self.path.exists():
            if not self.create:
                raise LibraryLoadError(f"Directory does not exist: {self.path}")
            self.path.mkdir(parents=True, exist_ok=True)
            logger.info(f"Created library directory: {self.path}")
        elif not self.path.is_dir():
            raise LibraryLoadError(f"Not a directory: {self.path}")
        self.ready = True

    def close(self) -> None:
        self.ready = False


LIBRARY_CLASS = DirectoryLibrary
