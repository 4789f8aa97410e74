"""
Employee Validation
=============================================================================
Business-rule checks run by the service before a record is created or fully
replaced. The checks are ordered and the first violation wins, so the order
below decides which message a caller sees when several fields are wrong:

  1. the candidate itself must be present
  2. name present and non-blank
  3. name length within [2, 20]
  4. name made of letters, spaces and hyphens only
  5. designation (when given) at most 50 characters
  6. company (when given) at most 100 characters
  7. date of birth (when given) strictly before today

Request bodies are checked structurally by the pydantic schemas first
(employee_service.schemas.employee) using the same limits. This module is
the authoritative check and also covers input that did not come through
HTTP (seed data, scripts, tests).
=============================================================================
"""

import re
from datetime import date
from typing import Any

from employee_service.db.models import (
    COMPANY_MAX_LENGTH,
    DESIGNATION_MAX_LENGTH,
    NAME_MAX_LENGTH,
)
from employee_service.exceptions import InvalidInputError

NAME_MIN_LENGTH = 2
NAME_PATTERN = re.compile(r"^[a-zA-Z\s-]+$")


def has_text(value: str | None) -> bool:
    """True if the value is not None and holds at least one non-whitespace char."""
    return value is not None and value.strip() != ""


def validate_employee(candidate: Any, today: date | None = None) -> None:
    """
    Raise InvalidInputError for the first rule `candidate` breaks.

    `candidate` is anything exposing name, designation, date_of_birth and
    company attributes: an EmployeeInput schema or an Employee row.
    `today` defaults to the current date and exists so tests can pin it.
    """
    if candidate is None:
        raise InvalidInputError("Employee data is required")

    name = candidate.name
    if not has_text(name):
        raise InvalidInputError("Employee name is required")
    if not NAME_MIN_LENGTH <= len(name) <= NAME_MAX_LENGTH:
        raise InvalidInputError(
            f"Employee name must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters"
        )
    if not NAME_PATTERN.match(name):
        raise InvalidInputError(
            "Employee name can only contain letters, spaces, and hyphens"
        )

    if has_text(candidate.designation) and len(candidate.designation) > DESIGNATION_MAX_LENGTH:
        raise InvalidInputError(
            f"Designation cannot exceed {DESIGNATION_MAX_LENGTH} characters"
        )

    if has_text(candidate.company) and len(candidate.company) > COMPANY_MAX_LENGTH:
        raise InvalidInputError(
            f"Company name cannot exceed {COMPANY_MAX_LENGTH} characters"
        )

    today = today or date.today()
    if candidate.date_of_birth is not None and candidate.date_of_birth >= today:
        raise InvalidInputError("Date of birth must be in the past")
