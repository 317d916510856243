"""
Pydantic schemas for the persons resource.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PersonIn(BaseModel):
    # A missing or null name is treated like an empty one.
    model_config = ConfigDict(strict=True)

    name: str | None = Field(default=None, validate_default=True)
    age: int | None = None
    address: str | None = None
    work: str | None = None

    @field_validator("name")
    @classmethod
    def _name_not_empty(cls, value: str | None) -> str:
        if not value:
            raise ValueError("must not be empty")
        return value


class PersonPatch(BaseModel):
    """
    Partial update body. See `service.merge_patch` for how fields apply.
    """

    model_config = ConfigDict(strict=True)

    name: str | None = None
    age: int | None = None
    address: str | None = None
    work: str | None = None


class Person(BaseModel):
    id: int
    name: str
    age: int | None = None
    address: str | None = None
    work: str | None = None

    @field_validator("address", "work")
    @classmethod
    def _blank_as_missing(cls, value: str | None) -> str | None:
        return value or None
