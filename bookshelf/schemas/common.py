"""
Shared schema pieces.

- ApiModel: Base class that speaks camelCase on the wire
  (profile_image <-> profileImage) while Python code uses snake_case
- Envelope / ListEnvelope: The {"success": true, "data": ...} wrappers
  every endpoint returns
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DataT = TypeVar("DataT")


class ApiModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class Envelope(ApiModel, Generic[DataT]):
    """Success wrapper for a single object."""

    success: bool = True
    data: DataT


class ListEnvelope(ApiModel, Generic[DataT]):
    """Success wrapper for a page of objects."""

    success: bool = True
    count: int = Field(..., description="Items on this page")
    total: int = Field(..., description="Items across all pages")
    page: int = Field(..., description="Current page (1-indexed)")
    data: list[DataT]


class MessageResponse(ApiModel):
    success: bool = True
    message: str
