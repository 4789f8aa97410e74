"""
Sample Data
=============================================================================
Fills an empty `employee` table with a small roster so the API can be tried
out without manual data entry. Used by the lifespan when SEED_SAMPLE_DATA is
set, and by `python -m scripts.seed_data`.

Every sample goes through validate_employee, the same check the API applies.
=============================================================================
"""

from datetime import date

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from employee_service.db.models import Employee
from employee_service.observability.logging import get_logger
from employee_service.services.validation import validate_employee

logger = get_logger(__name__)

SAMPLE_EMPLOYEES: list[dict] = [
    {"name": "John Doe", "designation": "Developer", "date_of_birth": date(1990, 5, 15), "company": "Tech Corp"},
    {"name": "Joanna Smith", "designation": "Manager", "date_of_birth": date(1985, 11, 2), "company": "Tech Corp"},
    {"name": "Mark Lee", "designation": "Developer", "date_of_birth": date(1995, 1, 20), "company": "Data Systems"},
    {"name": "Priya Nair", "designation": "Tester", "date_of_birth": date(1992, 7, 8), "company": "Data Systems"},
    {"name": "Jo-Ann Lee", "designation": "Architect", "date_of_birth": date(1980, 3, 30), "company": "Cloud Works"},
]


async def seed_employees(session: AsyncSession) -> int:
    """Insert the sample roster if the table is empty. Returns rows inserted."""
    count = (await session.execute(select(func.count(Employee.id)))).scalar_one()
    if count > 0:
        logger.info("seed_skipped", existing_rows=count)
        return 0

    employees = [Employee(**data) for data in SAMPLE_EMPLOYEES]
    for employee in employees:
        validate_employee(employee)

    session.add_all(employees)
    await session.commit()
    logger.info("seed_completed", inserted=len(employees))
    return len(employees)
