"""
Employee Request / Response Schemas
=============================================================================
CONCEPT: API Contracts

Pydantic models define the exact shape of data flowing in and out of the
API. JSON uses camelCase (dateOfBirth, creationTime) while Python code uses
snake_case; `populate_by_name=True` lets either spelling in.

  - EmployeeInput: POST and PUT bodies. Structurally validated with the same
    limits the service enforces, so a bad body is rejected with one error
    per offending field.
  - EmployeePatch: PATCH bodies. Every field optional; a non-blank value
    is held to the same per-field limits as EmployeeInput.
  - EmployeeResponse: what the API returns. `id` and `creationTime` are
    read-only; an `id` sent in a request body is ignored.
=============================================================================
"""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from employee_service.db.models import (
    COMPANY_MAX_LENGTH,
    DESIGNATION_MAX_LENGTH,
    NAME_MAX_LENGTH,
)
from employee_service.services.validation import NAME_MIN_LENGTH, NAME_PATTERN, has_text


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _check_name(v: str) -> str:
    if not NAME_MIN_LENGTH <= len(v) <= NAME_MAX_LENGTH:
        raise ValueError(
            f"Name must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters"
        )
    if not NAME_PATTERN.match(v):
        raise ValueError("Name can only contain letters, spaces, and hyphens")
    return v


def _check_designation(v: str) -> str:
    if len(v) > DESIGNATION_MAX_LENGTH:
        raise ValueError(f"Designation cannot exceed {DESIGNATION_MAX_LENGTH} characters")
    return v


def _check_company(v: str) -> str:
    if len(v) > COMPANY_MAX_LENGTH:
        raise ValueError(f"Company name cannot exceed {COMPANY_MAX_LENGTH} characters")
    return v


def _check_date_of_birth(v: date) -> date:
    if v >= date.today():
        raise ValueError("Date of birth must be in the past")
    return v


class EmployeeInput(_CamelModel):
    """Body of POST /employees and PUT /employees/{id}."""

    name: str = Field(..., description="Employee full name", examples=["John Doe"])
    designation: str | None = Field(None, description="Job title", examples=["Software Engineer"])
    date_of_birth: date | None = Field(None, description="Date of birth", examples=["1990-05-15"])
    company: str | None = Field(None, description="Employer", examples=["Tech Corp"])

    @field_validator("name")
    @classmethod
    def _validate_name(cls, v: str) -> str:
        return _check_name(v)

    @field_validator("designation")
    @classmethod
    def _validate_designation(cls, v: str | None) -> str | None:
        return v if v is None else _check_designation(v)

    @field_validator("company")
    @classmethod
    def _validate_company(cls, v: str | None) -> str | None:
        return v if v is None else _check_company(v)

    @field_validator("date_of_birth")
    @classmethod
    def _validate_date_of_birth(cls, v: date | None) -> date | None:
        return v if v is None else _check_date_of_birth(v)


class EmployeePatch(_CamelModel):
    """
    Body of PATCH /employees/{id}. Absent or blank fields are left alone;
    a field that will be applied must still satisfy the column rules.
    """

    name: str | None = None
    designation: str | None = None
    date_of_birth: date | None = None
    company: str | None = None

    @field_validator("name")
    @classmethod
    def _validate_name(cls, v: str | None) -> str | None:
        return _check_name(v) if has_text(v) else v

    @field_validator("designation")
    @classmethod
    def _validate_designation(cls, v: str | None) -> str | None:
        return _check_designation(v) if has_text(v) else v

    @field_validator("company")
    @classmethod
    def _validate_company(cls, v: str | None) -> str | None:
        return _check_company(v) if has_text(v) else v

    @field_validator("date_of_birth")
    @classmethod
    def _validate_date_of_birth(cls, v: date | None) -> date | None:
        return v if v is None else _check_date_of_birth(v)


class EmployeeResponse(_CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    designation: str | None = None
    date_of_birth: date | None = None
    company: str | None = None
    creation_time: datetime | None = None


class BulkDeleteResponse(BaseModel):
    deleted: int
