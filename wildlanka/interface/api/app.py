"""FastAPI application."""

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from wildlanka.config import Settings
from wildlanka.interface.api.routes import auth, health
from wildlanka.interface.error import register_error_handlers
from wildlanka.util.di.container import create_container, setup_di
from wildlanka.util.observability import (
    instrument_fastapi,
    instrument_httpx,
)


def create_app(
    settings: Settings | None = None, container: AsyncContainer | None = None
) -> FastAPI:
    """Create FastAPI application.

    Logfire should be configured before calling this function; in
    production ``scripts/start_app.py`` does it.

    Args:
        settings: Settings to use, loaded from the environment if omitted
        container: DI container, the production container if omitted

    Returns:
        Configured application
    """
    settings = settings or Settings()

    # Logfire must be configured before instrumentation
    instrument_httpx()

    app_instance = FastAPI(
        title="WildLanka Accounts API",
        description="Authentication and account profiles for the WildLanka platform",
        version="0.1.0",
    )
    app_instance.state.settings = settings

    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "OPTIONS"],
        allow_headers=[
            "Authorization",
            "Content-Type",
            "Accept",
            "Origin",
            "User-Agent",
            "X-Requested-With",
        ],
        expose_headers=["Content-Length", "Content-Type"],
        max_age=600,
    )

    setup_di(app_instance, container or create_container())
    register_error_handlers(app_instance)

    app_instance.include_router(health.router)
    app_instance.include_router(auth.router)

    return app_instance


# App instance for uvicorn; scripts/start_app.py configures Logfire first
app = create_app()
