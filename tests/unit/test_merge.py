from datetime import date

from employee_service.db.models import Employee
from employee_service.schemas.employee import EmployeeInput, EmployeePatch
from employee_service.services.merge import apply_full_update, apply_partial_update


def _existing() -> Employee:
    employee = Employee(
        name="John Doe",
        designation="Developer",
        date_of_birth=date(1990, 5, 15),
        company="Tech Corp",
    )
    employee.id = 101
    return employee


def test_partial_update_changes_only_given_field():
    existing = _existing()
    created_at = existing.creation_time

    merged = apply_partial_update(existing, EmployeePatch(designation="Manager"))

    assert merged is existing
    assert merged.designation == "Manager"
    assert merged.name == "John Doe"
    assert merged.date_of_birth == date(1990, 5, 15)
    assert merged.company == "Tech Corp"
    assert merged.id == 101
    assert merged.creation_time == created_at


def test_partial_update_skips_blank_strings():
    existing = _existing()

    apply_partial_update(existing, EmployeePatch(name="  ", designation="", company="\t"))

    assert existing.name == "John Doe"
    assert existing.designation == "Developer"
    assert existing.company == "Tech Corp"


def test_partial_update_applies_date_of_birth_when_present():
    existing = _existing()

    apply_partial_update(existing, EmployeePatch(date_of_birth=date(1988, 1, 1)))

    assert existing.date_of_birth == date(1988, 1, 1)


def test_partial_update_does_not_run_business_validation():
    existing = _existing()

    # the PATCH schema rejects "X"; the merge itself applies whatever it is given
    incoming = EmployeePatch.model_construct(
        name="X", designation=None, date_of_birth=None, company=None
    )
    apply_partial_update(existing, incoming)

    assert existing.name == "X"


def test_full_update_clears_missing_fields():
    existing = _existing()

    merged = apply_full_update(existing, EmployeeInput(name="Jane Roe"))

    assert merged.name == "Jane Roe"
    assert merged.designation is None
    assert merged.date_of_birth is None
    assert merged.company is None
    assert merged.id == 101


def test_full_update_passes_blank_strings_through():
    existing = _existing()

    apply_full_update(existing, EmployeeInput(name="Jane Roe", designation="", company=""))

    assert existing.designation == ""
    assert existing.company == ""


def test_full_and_partial_differ_on_missing_company():
    full = apply_full_update(_existing(), EmployeeInput(name="John Doe", designation="Manager"))
    partial = apply_partial_update(_existing(), EmployeePatch(designation="Manager"))

    assert full.company is None
    assert partial.company == "Tech Corp"
