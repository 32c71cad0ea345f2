from __future__ import annotations

from typing import Any, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


class ServiceError(Exception):
    """The single error surfaced by every service operation, mock or live."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        payload: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload


def build_model(model: Type[ModelT], data: Any, error_message: str) -> ModelT:
    """Validate a response body into ``model`` or raise ServiceError."""
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise ServiceError(error_message, payload=data) from exc


def build_model_list(model: Type[ModelT], data: Any, error_message: str) -> list[ModelT]:
    if not isinstance(data, list):
        raise ServiceError(error_message, payload=data)
    return [build_model(model, item, error_message) for item in data]
