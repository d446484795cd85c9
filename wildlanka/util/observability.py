"""Logfire setup and instrumentation.

Domain services and use cases call ``logfire.info`` / ``logfire.span``
directly; this module only configures Logfire once per process and hooks
it into the frameworks.
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from wildlanka.config import Settings

SERVICE_NAME = "wildlanka-accounts"


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for this process.

    Must run before any ``instrument_*`` call.

    Args:
        settings: Application settings
    """
    observability = settings.observability

    logfire.configure(
        service_name=SERVICE_NAME,
        service_version=settings.git_sha,
        environment=settings.environment,
        send_to_logfire=observability.export_enabled,
        token=observability.logfire_token,
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    )

    logfire.info(
        "Logfire configured",
        environment=settings.environment,
        export_enabled=observability.export_enabled,
    )


def instrument_fastapi(app: FastAPI) -> None:
    """Trace HTTP requests, except health checks.

    Request headers, and with them bearer tokens, are never recorded.
    """
    logfire.instrument_fastapi(
        app,
        capture_headers=False,
        excluded_urls="/health",
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace SQL statements issued through ``engine``."""
    logfire.instrument_sqlalchemy(engine=engine.sync_engine)


def instrument_httpx() -> None:
    """Trace outbound HTTP calls such as userinfo lookups."""
    logfire.instrument_httpx()
