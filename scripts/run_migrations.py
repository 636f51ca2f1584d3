#!/usr/bin/env python3
"""Apply database migrations.

Usage:
    python scripts/run_migrations.py [revision]

Upgrades to ``head`` unless a revision is given. Skipped when the
in-memory store is configured.
"""

import sys

import logfire
from alembic import command
from alembic.config import Config

from huddle.config import Settings
from huddle.util.logging import setup_logging
from huddle.util.observability import configure_logfire


def main(argv: list[str]) -> int:
    """Run migrations and report failures to Logfire."""
    settings = Settings()

    setup_logging(settings)
    configure_logfire(settings)

    if settings.store.backend == "memory":
        logfire.info("In-memory store configured, no migrations to run")
        return 0

    revision = argv[0] if argv else "head"
    try:
        logfire.info("Starting database migrations", revision=revision)
        command.upgrade(Config("alembic.ini"), revision)
        logfire.info("Database migrations completed", revision=revision)
        return 0

    except Exception as e:
        logfire.error(
            "Database migration failed",
            revision=revision,
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Non-zero exit blocks the deploy
        raise


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
