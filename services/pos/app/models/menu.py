from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class MenuItemCreateRequest(BaseModel):
    name: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    description: str | None = None
    price: float = Field(..., ge=0)
    image: str = Field(..., min_length=1)

    @field_validator("name", "category")
    @classmethod
    def _strip_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v


class MenuItemUpdateRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    category: str | None = Field(default=None, min_length=1)
    description: str | None = None
    price: float | None = Field(default=None, ge=0)
    image: str | None = Field(default=None, min_length=1)


class MenuItemOut(BaseModel):
    id: str
    name: str
    category: str
    description: str | None = None
    price: float
    image: str


class CategoryCreateRequest(BaseModel):
    name: str = Field(..., min_length=1)
    display_order: int = 0


class CategoryUpdateRequest(BaseModel):
    name: str | None = None
    display_order: int | None = None


class CategoryOut(BaseModel):
    id: str
    name: str
    display_order: int = 0
