"""
Utility functions and helpers for the library registry.
Includes logging setup and runtime information.
"""

import logging
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict

from config.settings import settings

def setup_logging() -> None:
    """Set up logging configuration for the application."""
    handlers = [logging.StreamHandler(sys.stdout)]

    # Optional dated log file
    if settings.LOG_DIR:
        os.makedirs(settings.LOG_DIR, exist_ok=True)
        log_file = Path(settings.LOG_DIR) / f"library_registry_{datetime.now().strftime('%Y%m%d')}.log"
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))

    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format=settings.LOG_FORMAT,
        datefmt=settings.LOG_DATE_FORMAT,
        handlers=handlers,
        force=True
    )

    # Suppress some noisy loggers
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)
    logger.info("Logging system initialized")

def ensure_directory(path: str) -> Path:
    """
    Create a directory if it does not exist.

    Args:
        path: Directory path

    Returns:
        The directory as a Path
    """
    directory = Path(path)
    if not directory.is_dir():
        directory.mkdir(parents=True, exist_ok=True)
        logging.getLogger(__name__).info(f"Created directory: {directory}")
    return directory

def get_system_info() -> Dict[str, Any]:
    """
    Get system and configuration information.

    Returns:
        Dictionary with system info
    """
    return {
        'python_version': sys.version,
        'working_directory': os.getcwd(),
        'config': {
            'etc_directory': settings.LIBRARY_ETC_DIR,
            'data_directory': settings.LIBRARY_DATA_DIR,
            'file_extension': settings.LIBRARY_FILE_EXTENSION,
            'poll_interval': settings.LIBRARY_POLL_INTERVAL
        },
        'timestamp': datetime.now().isoformat()
    }
