"""FastAPI application hosting the Messenger webhook."""

from contextlib import asynccontextmanager

import logfire
from fastapi import FastAPI

from fbmessenger.api.webhook import create_webhook_router
from fbmessenger.config import Settings, get_settings
from fbmessenger.logging_config import setup_logfire
from fbmessenger.services.dispatcher import CallbackDispatcher


def create_app(
    dispatcher: CallbackDispatcher,
    settings: Settings | None = None,
) -> FastAPI:
    """
    Build a webhook application around a dispatcher.

    Args:
        dispatcher: Handlers for incoming messaging events
        settings: Overrides the environment-loaded settings

    Returns:
        FastAPI app with the webhook mounted at ``/webhook`` and ``/health``
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Configure observability on startup."""
        setup_logfire(app)
        logfire.info("Webhook application startup complete", environment=settings.env)
        yield
        logfire.info("Webhook application shutdown complete")

    app = FastAPI(
        title="Facebook Messenger Webhook",
        description="Routes Messenger Platform callbacks to handlers",
        lifespan=lifespan,
    )
    app.include_router(
        create_webhook_router(
            dispatcher,
            verify_token=settings.messenger_verify_token,
            app_secret=settings.messenger_app_secret,
        ),
        prefix="/webhook",
        tags=["webhook"],
    )

    @app.get("/health", tags=["health"])
    def health():
        """Liveness probe."""
        return {"status": "healthy"}

    return app
