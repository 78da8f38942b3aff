"""
Value Objects - Immutable Domain Concepts

Value objects have no identity - two value objects are equal if their
values are equal.
"""

from __future__ import annotations

import uuid

from pydantic import BaseModel, ConfigDict, field_validator

from payment_service.domain.errors import InvalidUuidError


class UniqueEntityId(BaseModel):
    """
    Entity identifier backed by a UUID string.

    UniqueEntityId() generates a fresh uuid4.
    UniqueEntityId("42002e24-baea-41a7-9da2-6464319bc9c6") keeps the
    value exactly as given; anything that is not a UUID raises
    InvalidUuidError.
    """

    model_config = ConfigDict(frozen=True)

    value: str

    def __init__(self, value: str | uuid.UUID | None = None, **data: object):
        if value is None:
            value = str(uuid.uuid4())
        elif isinstance(value, uuid.UUID):
            value = str(value)
        elif not isinstance(value, str):
            raise InvalidUuidError(value)
        # pydantic wraps validator errors in ValidationError; check up front
        if not self.is_valid(value):
            raise InvalidUuidError(value)
        super().__init__(value=value, **data)

    @field_validator("value")
    @classmethod
    def validate_uuid(cls, v: str) -> str:
        if not cls.is_valid(v):
            raise ValueError(f"Invalid UUID: {v}")
        return v

    @staticmethod
    def is_valid(value: str) -> bool:
        """Return True if value is a UUID in canonical 8-4-4-4-12 form."""
        try:
            parsed = uuid.UUID(value)
        except (ValueError, AttributeError, TypeError):
            return False
        return str(parsed) == value.lower()

    def to_uuid(self) -> uuid.UUID:
        return uuid.UUID(self.value)

    def __str__(self) -> str:
        return self.value

    def __hash__(self) -> int:
        return hash(self.value)
