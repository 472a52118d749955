#!/usr/bin/env python3
"""
Command line entry point for the library registry.
Loads the configuration directory and reports the registered libraries.
"""

import atexit
import logging
import sys
import time
from pathlib import Path
from typing import Dict, List, Optional

from config.settings import settings
from core import library_registry
from core.file_tracker import FileTracker
from utils.helpers import ensure_directory, get_system_info, setup_logging

logger = logging.getLogger(__name__)

def format_libraries(libraries: Dict[str, str]) -> str:
    """
    Format a library listing for display.

    Args:
        libraries: Library name to type tag

    Returns:
        One "name: type" line per library
    """
    if not libraries:
        return "No library registered"
    width = max(len(name) for name in libraries)
    return "\n".join(f"{name.ljust(width)}  {type_tag}" for name, type_tag in libraries.items())

def watch(registry: library_registry.LibraryRegistry, interval: float) -> None:
    """Print the library listing every time it changes, until interrupted."""
    previous: Optional[Dict[str, str]] = None
    try:
        while True:
            current = registry.list_libraries()
            if current != previous:
                print(format_libraries(current))
                print("-" * 40)
                previous = current
            time.sleep(interval)
    except KeyboardInterrupt:
        logger.info("Watch interrupted")

def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = sys.argv[1:] if argv is None else argv

    # Setup logging
    setup_logging()

    # Validate configuration
    try:
        settings.validate()
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        return 1

    logger.info(f"System initialized: {get_system_info()}")

    tracker = FileTracker(Path(settings.LIBRARY_ETC_DIR), settings.LIBRARY_POLL_INTERVAL)
    registry = library_registry.initialize(ensure_directory(settings.LIBRARY_DATA_DIR), tracker)

    # Register shutdown handler to close libraries
    atexit.register(library_registry.shutdown)

    if "--types" in args:
        for type_tag, description in registry.type_registry.list_types().items():
            print(f"{type_tag}: {description}")
        return 0

    if "--watch" in args:
        watch(registry, settings.LIBRARY_POLL_INTERVAL)
        return 0

    print(format_libraries(registry.list_libraries()))
    return 0

if __name__ == "__main__":
    sys.exit(main())
