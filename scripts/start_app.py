#!/usr/bin/env python3
"""Run the Huddle API under uvicorn.

Logging and Logfire are configured before the app is built so that
failures while wiring the container are reported too.
"""

import sys

import logfire
import uvicorn

from huddle.config import Settings
from huddle.util.logging import setup_logging
from huddle.util.observability import configure_logfire


def main() -> int:
    """Start the application and report startup errors to Logfire."""
    settings = Settings()

    setup_logging(settings)
    configure_logfire(settings)

    try:
        logfire.info(
            "Starting Huddle API",
            host=settings.host,
            port=settings.port,
            store_backend=settings.store.backend,
        )
        uvicorn.run(
            "huddle.interface.api.app:create_app",
            factory=True,
            host=settings.host,
            port=settings.port,
            log_level="debug" if settings.debug else "info",
        )
        return 0

    except Exception as e:
        logfire.error(
            "Application startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
