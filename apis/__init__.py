"""
APIs module for external interfaces and SDKs.
Provides the REST API and a programmatic client.
"""

from fastapi import FastAPI

from core.library_registry import LibraryRegistry

def create_app(registry: LibraryRegistry) -> FastAPI:
    """Create and configure FastAPI application serving the given registry."""
    from .routes import router
    app = FastAPI(
        title="Library Registry API",
        description="Hot-reloadable library registry",
        version="1.0.0"
    )
    app.state.registry = registry
    app.include_router(router)
    return app
