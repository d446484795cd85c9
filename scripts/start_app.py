#!/usr/bin/env python3
"""Start the API with Logfire error tracking for startup errors."""

import sys

import logfire
import uvicorn

from wildlanka.config import Settings
from wildlanka.util.logging import setup_logging
from wildlanka.util.observability import configure_logfire


def main() -> int:
    """Start the application and log any startup errors to Logfire."""
    settings = Settings()

    # Configure before the app module is imported so startup errors are traced
    setup_logging(settings)
    configure_logfire(settings)

    try:
        logfire.info(
            "Starting WildLanka accounts API",
            environment=settings.environment,
            git_sha=settings.git_sha,
        )

        uvicorn.run(
            "wildlanka.interface.api.app:app",
            host="0.0.0.0",
            port=settings.port,
            log_level="debug" if settings.debug else "info",
            reload=settings.environment == "development",
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
