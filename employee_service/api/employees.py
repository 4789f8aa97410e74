"""
Employee API Endpoints
=============================================================================
CONCEPT: RESTful API Design

  GET    /employees                  list all
  POST   /employees                  create            (201)
  GET    /employees/{id}             read one          (404 if absent)
  PUT    /employees/{id}             full replace      (404 if absent)
  PATCH  /employees/{id}             partial merge     (404 if absent)
  DELETE /employees/{id}             delete            (204 / 404)

  Lookups:
  GET    /employees/designation/{designation}
  DELETE /employees/designation/{designation}     bulk delete
  GET    /employees/company/{company}
  GET    /employees/search?name=...               substring, case-insensitive
  GET    /employees/born-after?date=YYYY-MM-DD
  GET    /employees/filter?designation=...&company=...
  GET    /employees/count/designation/{designation}
  GET    /employees/exists?name=...

ROUTE ORDER MATTERS:
  Fixed paths (/search, /health, ...) are declared before /{employee_id};
  otherwise "search" would be parsed as an id and fail with a type error.

Routes never build error responses themselves. They let the service raise
and the handlers in employee_service.api.errors produce the body.
=============================================================================
"""

from datetime import date

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from employee_service.db.engine import get_db_session
from employee_service.observability.logging import get_logger
from employee_service.schemas.employee import (
    BulkDeleteResponse,
    EmployeeInput,
    EmployeePatch,
    EmployeeResponse,
)
from employee_service.services.employees import EmployeeService

logger = get_logger(__name__)

router = APIRouter(prefix="/employees", tags=["Employees"])


def get_employee_service(db: AsyncSession = Depends(get_db_session)) -> EmployeeService:
    return EmployeeService(db)


# =============================================================================
# Collection
# =============================================================================
@router.post("", response_model=EmployeeResponse, status_code=status.HTTP_201_CREATED)
async def create_employee(
    payload: EmployeeInput,
    service: EmployeeService = Depends(get_employee_service),
):
    """Create an employee. The id is assigned by the database."""
    logger.info("creating_employee", name=payload.name)
    return await service.create(payload)


@router.get("", response_model=list[EmployeeResponse])
async def list_employees(service: EmployeeService = Depends(get_employee_service)):
    """List every employee, ordered by id."""
    return await service.list_all()


# =============================================================================
# Lookups (fixed paths first)
# =============================================================================
@router.get("/health")
async def employee_health():
    return "Employee service is healthy"


@router.get("/search", response_model=list[EmployeeResponse])
async def search_employees_by_name(
    name: str = Query(..., description="Name fragment, matched case-insensitively"),
    service: EmployeeService = Depends(get_employee_service),
):
    return await service.search_by_name(name)


@router.get("/born-after", response_model=list[EmployeeResponse])
async def employees_born_after(
    threshold: date = Query(..., alias="date", description="ISO date (YYYY-MM-DD); strictly after"),
    service: EmployeeService = Depends(get_employee_service),
):
    return await service.get_born_after(threshold)


@router.get("/filter", response_model=list[EmployeeResponse])
async def filter_by_designation_and_company(
    designation: str = Query(...),
    company: str = Query(...),
    service: EmployeeService = Depends(get_employee_service),
):
    return await service.get_by_designation_and_company(designation, company)


@router.get("/exists", response_model=bool)
async def employee_exists_by_name(
    name: str = Query(..., description="Exact employee name"),
    service: EmployeeService = Depends(get_employee_service),
):
    return await service.exists_by_name(name)


@router.get("/count/designation/{designation}", response_model=int)
async def count_by_designation(
    designation: str,
    service: EmployeeService = Depends(get_employee_service),
):
    return await service.count_by_designation(designation)


@router.get("/designation/{designation}", response_model=list[EmployeeResponse])
async def employees_by_designation(
    designation: str,
    service: EmployeeService = Depends(get_employee_service),
):
    return await service.get_by_designation(designation)


@router.delete("/designation/{designation}", response_model=BulkDeleteResponse)
async def delete_by_designation(
    designation: str,
    service: EmployeeService = Depends(get_employee_service),
):
    """Delete every employee with this exact designation. Zero matches is not an error."""
    deleted = await service.delete_by_designation(designation)
    return BulkDeleteResponse(deleted=deleted)


@router.get("/company/{company}", response_model=list[EmployeeResponse])
async def employees_by_company(
    company: str,
    service: EmployeeService = Depends(get_employee_service),
):
    return await service.get_by_company(company)


# =============================================================================
# Single resource
# =============================================================================
@router.get("/{employee_id}", response_model=EmployeeResponse)
async def get_employee(
    employee_id: int,
    service: EmployeeService = Depends(get_employee_service),
):
    return await service.get(employee_id)


@router.put("/{employee_id}", response_model=EmployeeResponse)
async def update_employee(
    employee_id: int,
    payload: EmployeeInput,
    service: EmployeeService = Depends(get_employee_service),
):
    """Full replace. Fields missing from the body are cleared."""
    return await service.update(employee_id, payload)


@router.patch("/{employee_id}", response_model=EmployeeResponse)
async def patch_employee(
    employee_id: int,
    payload: EmployeePatch,
    service: EmployeeService = Depends(get_employee_service),
):
    """Partial merge. Absent, null or blank fields keep their stored value."""
    return await service.patch(employee_id, payload)


@router.delete("/{employee_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_employee(
    employee_id: int,
    service: EmployeeService = Depends(get_employee_service),
):
    await service.delete(employee_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
