"""
Employee Service: Business Operations over the Employee Table
=============================================================================
CONCEPT: Service Layer

Routes stay thin; this class holds the rules between HTTP and the
repository:
  - validation before create and full update
  - full-replace vs. partial-merge semantics for updates
  - argument guards for the query operations (no blank lookups)
  - the transaction boundary: one commit per operation, rollback on failure,
    database constraint failures re-raised as ConstraintViolationError

TRANSACTIONS:
  Writes run inside `_transaction()`. A read-merge-write (PUT/PATCH) reads
  the row, mutates it and flushes it in the same transaction, so a failure
  at any step leaves the row as it was. No extra locking is taken: the
  database's isolation level decides what concurrent writers see.

The class is built once per request around that request's AsyncSession
(see employee_service.api.employees.get_employee_service).
=============================================================================
"""

from contextlib import asynccontextmanager
from datetime import date

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from employee_service.db import repositories as repo
from employee_service.db.models import Employee
from employee_service.exceptions import (
    ConstraintViolationError,
    InvalidInputError,
    NotFoundError,
)
from employee_service.observability.logging import get_logger
from employee_service.observability.metrics import record_operation
from employee_service.schemas.employee import EmployeeInput, EmployeePatch
from employee_service.services.merge import apply_full_update, apply_partial_update
from employee_service.services.validation import has_text, validate_employee

logger = get_logger(__name__)


def _require_text(value: str | None, message: str) -> str:
    if not has_text(value):
        raise InvalidInputError(message)
    return value


class EmployeeService:
    def __init__(self, db: AsyncSession):
        self.db = db

    @asynccontextmanager
    async def _transaction(self):
        try:
            yield
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.error("integrity_error", error=str(e.orig))
            raise ConstraintViolationError(str(e.orig)) from e
        except Exception:
            await self.db.rollback()
            raise

    async def _get_or_raise(self, employee_id: int, action: str | None = None) -> Employee:
        if employee_id is None:
            raise InvalidInputError("Employee ID cannot be null")
        employee = await repo.get_employee_by_id(self.db, employee_id)
        if employee is None:
            logger.info("employee_not_found", employee_id=employee_id, action=action)
            raise NotFoundError(employee_id, action)
        return employee

    # =========================================================================
    # CRUD
    # =========================================================================
    async def create(self, payload: EmployeeInput) -> Employee:
        validate_employee(payload)
        async with self._transaction():
            employee = await repo.create_employee(
                self.db,
                Employee(
                    name=payload.name,
                    designation=payload.designation,
                    date_of_birth=payload.date_of_birth,
                    company=payload.company,
                ),
            )
        logger.info("employee_created", employee_id=employee.id, name=employee.name)
        record_operation("create")
        return employee

    async def list_all(self) -> list[Employee]:
        employees = await repo.list_employees(self.db)
        logger.debug("employees_listed", count=len(employees))
        record_operation("list")
        return employees

    async def get(self, employee_id: int) -> Employee:
        employee = await self._get_or_raise(employee_id)
        record_operation("get")
        return employee

    async def update(self, employee_id: int, payload: EmployeeInput) -> Employee:
        """Full replace: every mutable field is taken from `payload`."""
        if payload is None:
            raise InvalidInputError("Employee data cannot be null")
        validate_employee(payload)
        async with self._transaction():
            existing = await self._get_or_raise(employee_id, "update")
            apply_full_update(existing, payload)
            employee = await repo.save_employee(self.db, existing)
        logger.info("employee_updated", employee_id=employee_id)
        record_operation("update")
        return employee

    async def patch(self, employee_id: int, payload: EmployeePatch) -> Employee:
        """Partial merge: only present, non-blank fields are applied. No validation."""
        if payload is None:
            raise InvalidInputError("Employee data cannot be null")
        async with self._transaction():
            existing = await self._get_or_raise(employee_id, "patch")
            apply_partial_update(existing, payload)
            employee = await repo.save_employee(self.db, existing)
        logger.info(
            "employee_patched",
            employee_id=employee_id,
            fields=sorted(payload.model_dump(exclude_none=True)),
        )
        record_operation("patch")
        return employee

    async def delete(self, employee_id: int) -> None:
        async with self._transaction():
            employee = await self._get_or_raise(employee_id, "deletion")
            await repo.delete_employee(self.db, employee)
        logger.info("employee_deleted", employee_id=employee_id)
        record_operation("delete")

    # =========================================================================
    # Queries
    # =========================================================================
    async def get_by_designation(self, designation: str) -> list[Employee]:
        designation = _require_text(designation, "Designation cannot be null or empty")
        record_operation("find_by_designation")
        return await repo.find_by_designation(self.db, designation)

    async def get_by_company(self, company: str) -> list[Employee]:
        company = _require_text(company, "Company name cannot be null or empty")
        record_operation("find_by_company")
        return await repo.find_by_company(self.db, company)

    async def search_by_name(self, fragment: str) -> list[Employee]:
        fragment = _require_text(fragment, "Name cannot be null or empty")
        employees = await repo.search_by_name(self.db, fragment)
        logger.debug("employees_searched", fragment=fragment, count=len(employees))
        record_operation("search_by_name")
        return employees

    async def get_born_after(self, threshold: date) -> list[Employee]:
        if threshold is None:
            raise InvalidInputError("Date cannot be null")
        record_operation("find_born_after")
        return await repo.find_born_after(self.db, threshold)

    async def get_by_designation_and_company(
        self, designation: str, company: str
    ) -> list[Employee]:
        designation = _require_text(designation, "Designation cannot be null or empty")
        company = _require_text(company, "Company name cannot be null or empty")
        record_operation("find_by_designation_and_company")
        return await repo.find_by_designation_and_company(self.db, designation, company)

    async def count_by_designation(self, designation: str) -> int:
        designation = _require_text(designation, "Designation cannot be null or empty")
        record_operation("count_by_designation")
        return await repo.count_by_designation(self.db, designation)

    async def exists_by_name(self, name: str) -> bool:
        name = _require_text(name, "Name cannot be null or empty")
        record_operation("exists_by_name")
        return await repo.exists_by_name(self.db, name)

    async def delete_by_designation(self, designation: str) -> int:
        designation = _require_text(designation, "Designation cannot be null or empty")
        async with self._transaction():
            deleted = await repo.delete_by_designation(self.db, designation)
        logger.info("employees_bulk_deleted", designation=designation, deleted=deleted)
        record_operation("delete_by_designation")
        return deleted
