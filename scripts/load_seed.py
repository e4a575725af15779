#!/usr/bin/env python3
"""Load a seed bundle (categories, stores, users, deals) into the database.

Usage:
    python scripts/load_seed.py [path/to/seed.json]

Safe to re-run: records that already exist are skipped.
"""

import asyncio
import sys
from pathlib import Path

import logfire

from hotdeals.application.usecase.seed import LoadSeedUseCase, SeedBundle
from hotdeals.config import Settings
from hotdeals.util.di.container import create_script_container
from hotdeals.util.logging import setup_logging
from hotdeals.util.observability import configure_logfire

DEFAULT_SEED = Path(__file__).resolve().parent.parent / "data" / "seed.json"


async def load(path: Path) -> None:
    """Load ``path`` inside one request scope (one transaction)."""
    bundle = SeedBundle.model_validate_json(path.read_text(encoding="utf-8"))
    container = create_script_container()
    try:
        async with container() as request_container:
            use_case = await request_container.get(LoadSeedUseCase)
            report = await use_case.execute(bundle)
        print(report.model_dump_json(indent=2))
    finally:
        await container.close()


def main() -> int:
    """Load the seed file named on the command line (or the bundled one)."""
    settings = Settings()

    setup_logging(settings)
    configure_logfire(settings)

    path = Path(sys.argv[1]) if len(sys.argv) > 1 else DEFAULT_SEED
    try:
        logfire.info("Loading seed bundle", path=str(path))
        asyncio.run(load(path))
        return 0
    except Exception as e:
        logfire.error(
            "Seed load failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
