"""Observability configuration using Logfire.

Usage:
    import logfire

    logfire.info("Mark unlocked", mark_id=mark_id)

    with logfire.span("submit_ritual", identity_id=identity.id):
        ...
"""

import logfire
from sqlalchemy.ext.asyncio import AsyncEngine

from ritual.config import Settings


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire.

    Console-only unless a token is configured. Set
    OBSERVABILITY__LOGFIRE_TOKEN to send to Logfire cloud, or force the
    choice with OBSERVABILITY__SEND_TO_LOGFIRE.

    Args:
        settings: Engine settings
    """
    if settings.observability.send_to_logfire is not None:
        send_to_logfire = settings.observability.send_to_logfire
    else:
        send_to_logfire = bool(settings.observability.logfire_token)

    config_kwargs = {
        "service_name": "ritual-engine",
        "service_version": "0.1.0",
        "environment": settings.environment,
        "send_to_logfire": send_to_logfire,
        "console": logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    }
    if settings.observability.logfire_token:
        config_kwargs["token"] = settings.observability.logfire_token

    logfire.configure(**config_kwargs)

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        debug=settings.debug,
        send_to_logfire=send_to_logfire,
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace remote store queries.

    Args:
        engine: SQLAlchemy async engine
    """
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)
    logfire.info("SQLAlchemy instrumented")
