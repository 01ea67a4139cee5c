"""
Shared schema plumbing: camelCase wire format and the response envelope.
"""

from typing import ClassVar, FrozenSet, Generic, Optional, TypeVar
from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """snake_case in Python, camelCase in JSON; accepts either on input."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class Envelope(CamelModel, Generic[T]):
    """Standard `{success, message?, data?}` response body."""
    success: bool = True
    message: Optional[str] = None
    data: Optional[T] = None


class MessageResponse(CamelModel):
    success: bool = True
    message: str


class PaginatedEnvelope(Envelope[T], Generic[T]):
    count: int
    total: int
    total_pages: int
    current_page: int


class ListEnvelope(Envelope[T], Generic[T]):
    count: int


class PartialUpdate(CamelModel):
    """
    Base for partial-update bodies. Omitted fields are left untouched; an
    explicit null is only accepted for columns that may be empty.
    """
    nullable_fields: ClassVar[FrozenSet[str]] = frozenset()

    # Defaults are not validated, so this only sees values the client sent
    @field_validator("*")
    @classmethod
    def reject_null(cls, v, info: ValidationInfo):
        if v is None and info.field_name not in cls.nullable_fields:
            raise ValueError("cannot be null")
        return v
