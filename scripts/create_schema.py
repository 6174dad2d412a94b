#!/usr/bin/env python3
"""Create the remote store schema with Logfire error tracking."""

import asyncio
import sys

import logfire

from ritual.config import Settings
from ritual.persistence.database import create_engine, create_schema
from ritual.util.logging import setup_logging
from ritual.util.observability import configure_logfire


async def _run(settings: Settings) -> None:
    engine = create_engine(settings)
    try:
        await create_schema(engine)
    finally:
        await engine.dispose()


def main() -> int:
    """Create tables and log any errors to Logfire."""
    settings = Settings()

    configure_logfire(settings)
    setup_logging(settings)

    try:
        logfire.info("Creating remote store schema")
        asyncio.run(_run(settings))
        logfire.info("Remote store schema ready")
        return 0

    except Exception as e:
        logfire.error(
            "Schema creation failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
