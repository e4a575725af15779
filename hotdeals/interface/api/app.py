"""FastAPI application."""

from fastapi import FastAPI

from hotdeals import __version__
from hotdeals.interface.api.routes import categories, deals, health, stores, users
from hotdeals.util.di.container import create_container, setup_di
from hotdeals.util.observability import instrument_fastapi


def create_app() -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.
    In tests, configure in conftest.py if needed.
    """
    app_instance = FastAPI(
        title="Hot Deals API",
        description="Backend API for the hot deals marketplace - categories, stores, users and community-voted deals",
        version=__version__,
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    instrument_fastapi(app_instance)

    # Setup dependency injection
    # Settings are loaded from environment automatically
    container = create_container()
    setup_di(app_instance, container)

    # Register routes
    app_instance.include_router(health.router)
    app_instance.include_router(categories.router)
    app_instance.include_router(stores.router)
    app_instance.include_router(users.router)
    app_instance.include_router(deals.router)

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
# In production: start_app.py handles this
# In tests: configure in conftest.py
app = create_app()
