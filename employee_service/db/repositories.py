"""
Data Access Layer (Repositories)
=============================================================================
CONCEPT: Repository Pattern

The Repository pattern separates data access logic from business logic.
Instead of writing SQL queries in API routes, all database operations for
the `employee` table live here.

Each function is a thin wrapper around one SQLAlchemy statement. None of
them commit: the service layer owns the transaction boundary, so a
read-merge-write sequence is committed (or rolled back) as one unit.
Writes are flushed so generated ids and constraint violations surface
immediately.
=============================================================================
"""

from datetime import date

from sqlalchemy import delete, exists, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from employee_service.db.models import Employee


# =============================================================================
# Basic CRUD
# =============================================================================
async def create_employee(db: AsyncSession, employee: Employee) -> Employee:
    """Insert a new employee and return it with its generated id."""
    db.add(employee)
    await db.flush()
    return employee


async def get_employee_by_id(db: AsyncSession, employee_id: int) -> Employee | None:
    """Fetch an employee by primary key."""
    result = await db.execute(
        select(Employee).where(Employee.id == employee_id)
    )
    return result.scalar_one_or_none()


async def list_employees(db: AsyncSession) -> list[Employee]:
    """List every employee, ordered by id."""
    result = await db.execute(select(Employee).order_by(Employee.id))
    return list(result.scalars().all())


async def save_employee(db: AsyncSession, employee: Employee) -> Employee:
    """Flush pending changes on an already-tracked employee."""
    db.add(employee)
    await db.flush()
    return employee


async def delete_employee(db: AsyncSession, employee: Employee) -> None:
    await db.delete(employee)
    await db.flush()


# =============================================================================
# Predicate queries
# =============================================================================
async def find_by_designation(db: AsyncSession, designation: str) -> list[Employee]:
    result = await db.execute(
        select(Employee)
        .where(Employee.designation == designation)
        .order_by(Employee.id)
    )
    return list(result.scalars().all())


async def find_by_company(db: AsyncSession, company: str) -> list[Employee]:
    result = await db.execute(
        select(Employee)
        .where(Employee.company == company)
        .order_by(Employee.id)
    )
    return list(result.scalars().all())


async def search_by_name(db: AsyncSession, fragment: str) -> list[Employee]:
    """
    Search employees whose name contains `fragment` (case-insensitive).

    `%` and `_` in the fragment match literally, not as LIKE wildcards.
    """
    result = await db.execute(
        select(Employee)
        .where(Employee.name.icontains(fragment, autoescape=True))
        .order_by(Employee.id)
    )
    return list(result.scalars().all())


async def find_born_after(db: AsyncSession, threshold: date) -> list[Employee]:
    """Employees whose date of birth is strictly after `threshold`."""
    result = await db.execute(
        select(Employee)
        .where(Employee.date_of_birth > threshold)
        .order_by(Employee.id)
    )
    return list(result.scalars().all())


async def find_by_designation_and_company(
    db: AsyncSession, designation: str, company: str
) -> list[Employee]:
    result = await db.execute(
        select(Employee)
        .where(Employee.designation == designation, Employee.company == company)
        .order_by(Employee.id)
    )
    return list(result.scalars().all())


async def count_by_designation(db: AsyncSession, designation: str) -> int:
    result = await db.execute(
        select(func.count(Employee.id)).where(Employee.designation == designation)
    )
    return result.scalar_one()


async def exists_by_name(db: AsyncSession, name: str) -> bool:
    result = await db.execute(
        select(exists().where(Employee.name == name))
    )
    return bool(result.scalar())


async def delete_by_designation(db: AsyncSession, designation: str) -> int:
    """Bulk-delete every employee with this designation; returns the row count."""
    result = await db.execute(
        delete(Employee).where(Employee.designation == designation)
    )
    return result.rowcount or 0
