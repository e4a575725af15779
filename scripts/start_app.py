#!/usr/bin/env python3
"""Serve the Hot Deals API with uvicorn.

Logging and Logfire are configured before the app module is imported so
that import-time failures are reported too.
"""

import sys

import logfire
import uvicorn

from hotdeals.config import Settings
from hotdeals.util.logging import setup_logging
from hotdeals.util.observability import configure_logfire


def main() -> int:
    """Run the server until interrupted."""
    settings = Settings()

    setup_logging(settings)
    configure_logfire(settings)

    logfire.info(
        "Starting Hot Deals API",
        environment=settings.environment,
        git_sha=settings.git_sha,
        auto_create_tags=settings.ledger.auto_create_tags,
        lock_timeout_seconds=settings.ledger.lock_timeout_seconds,
    )
    try:
        # Caller headers arrive through the gateway
        uvicorn.run(
            "hotdeals.interface.api.app:app",
            host=settings.host,
            port=settings.port,
            proxy_headers=True,
            log_level="debug" if settings.debug else "info",
        )
    except Exception as e:
        logfire.error(
            "Hot Deals API failed to start",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise
    return 0


if __name__ == "__main__":
    sys.exit(main())
