"""Logfire setup for the API process.

Services log through the ``logfire`` module directly; spans are named
``<service>.<operation>``:

    with logfire.span("membership_service.decide", request_id=request_id):
        logfire.info("Join request decided", status=status)
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from huddle.config import Settings

SERVICE_NAME = "huddle-api"
SERVICE_VERSION = "0.1.0"

# Identity tokens travel in these fields and never reach the exporter
_SCRUB_PATTERNS = ["auth_token", "token"]


def _should_send(settings: Settings) -> bool:
    explicit = settings.observability.send_to_logfire
    if explicit is not None:
        return explicit
    return bool(settings.observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire once per process.

    The console exporter is always on. Telemetry leaves the process only
    when ``OBSERVABILITY__SEND_TO_LOGFIRE`` says so or a token is set.

    Args:
        settings: Application settings
    """
    send = _should_send(settings)

    logfire.configure(
        service_name=SERVICE_NAME,
        service_version=SERVICE_VERSION,
        environment=settings.environment,
        send_to_logfire=send,
        token=settings.observability.logfire_token,
        scrubbing=logfire.ScrubbingOptions(extra_patterns=_SCRUB_PATTERNS),
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
        store_backend=settings.store.backend,
        send_to_logfire=send,
    )


def instrument_fastapi(app: FastAPI) -> None:
    """Trace HTTP and WebSocket requests, except health probes."""
    logfire.instrument_fastapi(app, capture_headers=False, excluded_urls="/health")


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace the SQL issued by the Postgres entity store."""
    logfire.instrument_sqlalchemy(engine=engine.sync_engine)
    logfire.info("SQLAlchemy instrumented", url=engine.url.render_as_string())
