"""
Error body returned by every failed request.

Fields that have no value (no field errors, no rejected value) are dropped
from the JSON rather than sent as null; see `ErrorResponse.to_content`.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def _now() -> str:
    return datetime.now().strftime(TIMESTAMP_FORMAT)


class FieldErrorDetail(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    field: str
    message: str
    rejected_value: Any = None


class ErrorResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    timestamp: str = Field(default_factory=_now)
    status: int
    message: str
    details: str | None = None
    path: str | None = None
    field_errors: list[FieldErrorDetail] | None = None

    def to_content(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
