"""Create the TalentNest tables directly, without Alembic (local development)."""

import argparse
import asyncio

from sqlalchemy import text

from talentnest.config import settings
from talentnest.database import engine
from talentnest.models import metadata


async def init_db(reset: bool = False) -> None:
    """Create users, provider profiles and provider documents, optionally dropping them first."""
    async with engine.begin() as conn:
        if reset:
            await conn.run_sync(metadata.drop_all)

        if not settings.is_sqlite:
            await conn.execute(text('CREATE EXTENSION IF NOT EXISTS "pgcrypto"'))

        await conn.run_sync(metadata.create_all)

    await engine.dispose()
    print(f"✓ Tables ready: {', '.join(sorted(metadata.tables))}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Create the TalentNest database tables")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Drop every table first (all users, profiles and documents are lost)",
    )
    args = parser.parse_args()

    if args.reset and settings.is_production:
        parser.error("Refusing to reset a production database")

    asyncio.run(init_db(reset=args.reset))


if __name__ == "__main__":
    main()
