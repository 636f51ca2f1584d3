"""FastAPI application factory."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from huddle.config import Settings
from huddle.interface.api.routes import activities, chats, health, profiles, requests
from huddle.interface.error import register_error_handlers
from huddle.util.di.container import create_container, setup_di
from huddle.util.observability import SERVICE_VERSION, instrument_fastapi

ROUTERS = (
    health.router,
    activities.router,
    requests.router,
    chats.router,
    profiles.router,
)


def _add_cors(app: FastAPI, settings: Settings) -> None:
    # The auth cookie is sent cross-origin
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept", "Origin"],
        max_age=600,
    )


def create_app() -> FastAPI:
    """Build the Huddle API.

    Logfire must already be configured; ``scripts/start_app.py`` does it
    before handing this factory to uvicorn.
    """
    settings = Settings()

    app = FastAPI(
        title="Huddle API",
        description="Host activities, approve who joins, chat with the group",
        version=SERVICE_VERSION,
    )
    instrument_fastapi(app)
    _add_cors(app, settings)

    setup_di(app, create_container())
    register_error_handlers(app)

    for router in ROUTERS:
        app.include_router(router)

    return app
