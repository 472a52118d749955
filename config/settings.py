"""
Centralized configuration management for the library registry.
Loads environment variables and provides default configurations.
"""

import os
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

class Settings:
    """Application settings and configuration."""

    # Directories
    LIBRARY_ETC_DIR: str = os.getenv("LIBRARY_ETC_DIR", "etc")
    LIBRARY_DATA_DIR: str = os.getenv("LIBRARY_DATA_DIR", "data")

    # Configuration files
    LIBRARY_FILE_EXTENSION: str = os.getenv("LIBRARY_FILE_EXTENSION", "json")
    LIBRARY_POLL_INTERVAL: float = float(os.getenv("LIBRARY_POLL_INTERVAL", "2.0"))  # seconds

    # API Server
    API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
    API_PORT: int = int(os.getenv("API_PORT", "8000"))

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT: str = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
    LOG_DATE_FORMAT: str = '%Y-%m-%d %H:%M:%S'
    LOG_DIR: Optional[str] = os.getenv("LOG_DIR")

    @classmethod
    def validate(cls) -> None:
        """Validate that all required settings are usable."""
        problems = []

        if not Path(cls.LIBRARY_ETC_DIR).is_dir():
            problems.append(f"LIBRARY_ETC_DIR is not a directory: {cls.LIBRARY_ETC_DIR}")
        if cls.LIBRARY_POLL_INTERVAL <= 0:
            problems.append(f"LIBRARY_POLL_INTERVAL must be positive: {cls.LIBRARY_POLL_INTERVAL}")
        if not cls.LIBRARY_FILE_EXTENSION:
            problems.append("LIBRARY_FILE_EXTENSION must not be empty")

        if problems:
            raise ValueError(f"Invalid configuration: {'; '.join(problems)}")

# Global settings instance
settings = Settings()
