"""FastAPI application."""

from dishka import AsyncContainer
from fastapi import FastAPI

from tokiwa.interface.api.routes import account, auth, health, users
from tokiwa.interface.error import register_exception_handlers
from tokiwa.util.di.container import create_container, setup_di
from tokiwa.util.observability import (
    SERVICE_VERSION,
    instrument_fastapi,
    instrument_httpx,
)


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        container: DI container to serve requests from. Defaults to the
            production container; tests pass one built with mocks.
    """
    # Instrument httpx for outbound calls to credential providers
    # (Logfire must be configured before instrumentation)
    instrument_httpx()

    app_instance = FastAPI(
        title="Tokiwa Identity API",
        description="Sign-in with email/password, Google, GitHub and Twitter, "
        "account linking and session tokens",
        version=SERVICE_VERSION,
    )

    instrument_fastapi(app_instance)

    register_exception_handlers(app_instance)

    # Settings are loaded from environment automatically
    setup_di(app_instance, container or create_container())

    app_instance.include_router(health.router)
    app_instance.include_router(auth.router)
    app_instance.include_router(account.router)
    app_instance.include_router(users.router)

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
# In production: start_app.py handles this
app = create_app()
