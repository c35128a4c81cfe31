"""Shared base for request-side models."""

from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator


class WireModel(BaseModel):
    """Model parsed from caller JSON.

    An explicit ``null`` on an optional field selects that field's default,
    the same as leaving it out. Required fields still reject ``null``.
    """

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("*", mode="before")
    @classmethod
    def _null_means_default(cls, value: Any, info: ValidationInfo) -> Any:
        if value is not None or info.field_name is None:
            return value
        field = cls.model_fields[info.field_name]
        if field.is_required():
            return value
        return field.get_default(call_default_factory=True)
