"""Standardized JSON response envelope."""


from typing import Generic, TypeVar

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class DataResponse(BaseModel, Generic[T]):
    """Response envelope: `{ data: ... }` for single items and lists alike."""

    data: T

    model_config = {
        "populate_by_name": True,
        "alias_generator": to_camel,
    }
