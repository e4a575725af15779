#!/usr/bin/env python3
"""Apply database migrations.

Usage:
    python scripts/run_migrations.py [revision]

Upgrades to ``head`` unless another revision is given. The database URL
comes from ``DATABASE__URL`` (see ``migrations/env.py``).
"""

import sys
from pathlib import Path

import logfire
from alembic import command
from alembic.config import Config
from sqlalchemy.engine import make_url

from hotdeals.config import Settings
from hotdeals.util.logging import setup_logging
from hotdeals.util.observability import configure_logfire

ALEMBIC_INI = Path(__file__).resolve().parent.parent / "alembic.ini"


def main() -> int:
    """Upgrade the schema, failing loudly so a deploy stops on a broken schema."""
    settings = Settings()

    setup_logging(settings)
    configure_logfire(settings)

    revision = sys.argv[1] if len(sys.argv) > 1 else "head"
    url = make_url(settings.database_url)
    with logfire.span(
        "run_migrations", revision=revision, host=url.host, database=url.database
    ):
        try:
            command.upgrade(Config(str(ALEMBIC_INI)), revision)
        except Exception as e:
            logfire.error(
                "Database migration failed",
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            raise
        logfire.info("Database migrated", revision=revision)
    return 0


if __name__ == "__main__":
    sys.exit(main())
