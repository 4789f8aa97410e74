"""
Seed Data Script: populate the database with sample employees
=============================================================================
Creates the `employee` table if needed and inserts the sample roster from
employee_service.db.seed when the table is empty.

Run: python -m scripts.seed_data
=============================================================================
"""

import asyncio

from employee_service.db.engine import async_session_maker, create_tables, engine
from employee_service.db.seed import seed_employees
from employee_service.observability.logging import setup_logging


async def main():
    setup_logging()
    print("Seeding database...")

    await create_tables()
    async with async_session_maker() as session:
        inserted = await seed_employees(session)

    print(f"Seeding complete: {inserted} employees created")
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
