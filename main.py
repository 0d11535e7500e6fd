import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fitpulse.config import Settings, get_settings
from fitpulse.infrastructure.database import SessionLocal, engine, initialize_database
from fitpulse.infrastructure.notifications import (
    NotificationHubs,
    build_notification_hubs,
)
from fitpulse.infrastructure.security import JwtCredentialVerifier
from fitpulse.infrastructure.stores import SqlAlchemyNotificationStore
from fitpulse.interfaces.api.routes import register_routes


def configure_logging(settings: Settings) -> None:
    """Apply the configured log level to the root logger."""

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logging.getLogger().setLevel(settings.log_level)


def create_app(hubs: NotificationHubs | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    ``hubs`` replaces the database backed hubs built at startup.
    """

    settings = get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(settings)
        notification_hubs = hubs
        if notification_hubs is None:
            initialize_database()
            notification_hubs = build_notification_hubs(
                settings,
                store=SqlAlchemyNotificationStore(SessionLocal),
                verifier=JwtCredentialVerifier(settings),
            )
        await notification_hubs.start()
        app.state.notification_hubs = notification_hubs
        try:
            yield
        finally:
            await notification_hubs.stop()
            if hubs is None:
                engine.dispose()

    app = FastAPI(title="FitPulse Realtime", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)
    return app


app = create_app()
