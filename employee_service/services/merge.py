"""
Update merging for PUT (full replace) and PATCH (partial merge).

Both functions mutate `existing` in place and return it. `id` and
`creation_time` are never touched, so they always come from `existing`.

The two variants treat blanks differently:
  - full replace copies every mutable field as-is, blanks and None included
  - partial merge skips None and blank strings for the text fields, and
    skips only None for the date of birth
"""

from typing import Any

from employee_service.db.models import Employee
from employee_service.services.validation import has_text

MUTABLE_FIELDS = ("name", "designation", "date_of_birth", "company")
TEXT_FIELDS = ("name", "designation", "company")


def apply_full_update(existing: Employee, incoming: Any) -> Employee:
    """Overwrite every mutable field of `existing` from an already-validated body."""
    for field in MUTABLE_FIELDS:
        setattr(existing, field, getattr(incoming, field))
    return existing


def apply_partial_update(existing: Employee, incoming: Any) -> Employee:
    """Copy only the fields `incoming` actually carries a usable value for."""
    for field in TEXT_FIELDS:
        value = getattr(incoming, field)
        if has_text(value):
            setattr(existing, field, value)

    if incoming.date_of_birth is not None:
        existing.date_of_birth = incoming.date_of_birth

    return existing
