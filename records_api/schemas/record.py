"""
Sample record schemas.

WHAT: Pydantic models validating record create and update payloads.

WHY: Records are open-ended, so unknown fields are allowed. The models
only pin down the fields with known types and keep the identifiers out of
caller hands: ``_id`` is never accepted and ``id`` cannot be changed.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, model_validator


def _reject_keys(data: Any, keys: tuple, reason: str) -> Any:
    if isinstance(data, dict):
        present = [key for key in keys if key in data]
        if present:
            raise ValueError(f"{', '.join(present)} {reason}")
    return data


class RecordCreate(BaseModel):
    """
    Schema for creating a record.

    ``id`` is stripped by the service before validation; ``_id`` is rejected.
    """

    param: Optional[str] = None

    model_config = ConfigDict(
        extra="allow",
        json_schema_extra={"example": {"param": "value", "name": "Widget"}},
    )

    @model_validator(mode="before")
    @classmethod
    def reject_storage_id(cls, data: Any) -> Any:
        return _reject_keys(data, ("_id",), "is assigned by storage")


class RecordUpdate(BaseModel):
    """Schema for updating a record by id."""

    any: Optional[str] = None

    model_config = ConfigDict(
        extra="allow",
        json_schema_extra={"example": {"any": "String"}},
    )

    @model_validator(mode="before")
    @classmethod
    def reject_identifiers(cls, data: Any) -> Any:
        return _reject_keys(data, ("id", "_id"), "cannot be updated")

