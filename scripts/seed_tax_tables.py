"""Seed script for the reference tax tables.

Run with:
    python scripts/seed_tax_tables.py [YEAR]

Creates the schema if needed, then records the built-in federal and state
rates as TaxTable rows for the given year (default: the current year).
"""

from __future__ import annotations

import asyncio
import logging
import sys
from datetime import date

from payroll_core.database import create_schema, dispose_db, get_session
from payroll_core.seed import seed_tax_tables


async def main(year: int) -> None:
    """Run seed script."""
    await create_schema()
    try:
        async with get_session() as session:
            created = await seed_tax_tables(session, year)
    finally:
        await dispose_db()

    print(f"Done! {created} tax tables seeded for {year}.")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main(int(sys.argv[1]) if len(sys.argv) > 1 else date.today().year))
