from __future__ import annotations

from typing import Any, Mapping, Optional, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from ayusetu.integrations.errors import build_model


class ApiModel(BaseModel):
    """Base for every request/response shape: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class SuccessResponse(ApiModel):
    success: bool
    message: Optional[str] = None


ModelT = TypeVar("ModelT", bound=BaseModel)


def merge_model(model: ModelT, updates: Mapping[str, Any], error_message: str = "Invalid update") -> ModelT:
    """Return a validated copy of ``model`` with a partial update applied.

    ``updates`` may use either the Python field names or the camelCase wire names.
    A value of the wrong type raises ServiceError(``error_message``).
    """
    data = model.model_dump(by_alias=True)
    fields = type(model).model_fields
    for key, value in updates.items():
        field = fields.get(key)
        data[(field.alias or key) if field else key] = value
    return build_model(type(model), data, error_message)


def wire_updates(model: type, updates: Mapping[str, Any]) -> dict:
    """Rename the keys of a partial update to ``model``'s wire aliases."""
    fields = model.model_fields
    return {(fields[key].alias or key) if key in fields else key: value for key, value in updates.items()}
