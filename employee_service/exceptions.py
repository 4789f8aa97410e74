"""
Domain Exceptions
=============================================================================
The service and query layers signal failures by raising these exceptions.
They know nothing about HTTP: each one only carries an ErrorKind, and the
status code is chosen at the outermost boundary (employee_service.api.errors).
=============================================================================
"""

from enum import Enum


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    INVALID_INPUT = "invalid_input"
    CONSTRAINT_VIOLATION = "constraint_violation"
    UNEXPECTED = "unexpected"


class EmployeeServiceError(Exception):
    """Base class for every failure the service raises on purpose."""

    kind: ErrorKind = ErrorKind.UNEXPECTED

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(EmployeeServiceError):
    kind = ErrorKind.NOT_FOUND

    def __init__(self, employee_id: int, action: str | None = None):
        message = f"No employee found for ID: {employee_id}"
        if action:
            message = f"{message} for {action}"
        super().__init__(message)
        self.employee_id = employee_id


class InvalidInputError(EmployeeServiceError):
    kind = ErrorKind.INVALID_INPUT


class ConstraintViolationError(EmployeeServiceError):
    kind = ErrorKind.CONSTRAINT_VIOLATION
