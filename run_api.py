#!/usr/bin/env python3
"""
API server runner for the library registry.
Starts the FastAPI server over a registry tracking the configuration directory.
"""

import uvicorn
import logging
from apis import create_app
from config.settings import settings
from core.library_registry import LibraryRegistry
from di import ComponentFactory
from interfaces import IChangeSource
from utils.helpers import setup_logging

def main():
    """Main entry point for API server."""
    # Setup logging
    setup_logging()

    # Validate configuration
    try:
        settings.validate()
    except ValueError as e:
        logging.error(f"Configuration error: {e}")
        return

    # Wire components
    container = ComponentFactory().build_container()
    registry = container.resolve(LibraryRegistry)
    tracker = container.resolve(IChangeSource)
    tracker.start()

    # Create FastAPI app
    app = create_app(registry)

    logging.info(f"Starting library registry API server on {settings.API_HOST}:{settings.API_PORT}")

    try:
        uvicorn.run(
            app,
            host=settings.API_HOST,
            port=settings.API_PORT,
            log_level="info",
            access_log=True
        )
    finally:
        container.shutdown()

if __name__ == "__main__":
    main()
