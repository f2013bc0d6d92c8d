from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1)
    category: str = ""
    preferences: list[str] = Field(default_factory=list)
    features: list[str] = Field(default_factory=list)
    description: str | None = None


class Product(ProductCreate):
    id: int


class ProductUpdate(BaseModel):
    """Partial update: only the fields present in the request are applied."""

    name: str | None = Field(default=None, min_length=1)
    category: str | None = None
    preferences: list[str] | None = None
    features: list[str] | None = None
    description: str | None = None

    @field_validator("name", "category", "preferences", "features")
    @classmethod
    def _reject_explicit_null(cls, value):
        # Omit a field to leave it unchanged; only description may be cleared.
        if value is None:
            raise ValueError("may be omitted but not null")
        return value
