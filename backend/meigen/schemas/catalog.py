"""
Meigen Backend — Category, Subcategory & Author Schemas
========================================================

Request bodies are validated here, before the service layer sees them.
Update schemas are partial: only fields present in the body are applied
(`model_dump(exclude_unset=True)`), and an explicit null is rejected for
columns that are NOT NULL in the database.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from meigen.schemas.common import CamelModel


def reject_null(v):
    if v is None:
        raise ValueError("must not be null")
    return v


# ══════════════════════════════════════════════════════════════════════════
# Category
# ══════════════════════════════════════════════════════════════════════════

class CategoryCreate(CamelModel):
    name: str = Field(min_length=1, max_length=100, description="Unique category name")


class CategoryUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)

    @field_validator("name")
    @classmethod
    def not_null(cls, v):
        return reject_null(v)


class CategoryResponse(CamelModel):
    id: int
    name: str
    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = None


class CategoryDetailResponse(CategoryResponse):
    subcategory_count: int = Field(description="Live subcategories under this category")


# ══════════════════════════════════════════════════════════════════════════
# Subcategory
# ══════════════════════════════════════════════════════════════════════════

class SubcategoryCreate(CamelModel):
    category_id: int = Field(gt=0)
    name: str = Field(min_length=1, max_length=100)


class SubcategoryUpdate(CamelModel):
    category_id: Optional[int] = Field(default=None, gt=0)
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)

    @field_validator("category_id", "name")
    @classmethod
    def not_null(cls, v):
        return reject_null(v)


class SubcategoryResponse(CamelModel):
    id: int
    category_id: int
    name: str
    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = None


class SubcategoryWithCategory(SubcategoryResponse):
    category: CategoryResponse


# ══════════════════════════════════════════════════════════════════════════
# Author
# ══════════════════════════════════════════════════════════════════════════

class AuthorCreate(CamelModel):
    name: str = Field(min_length=1, max_length=200, description="Unique author name")


class AuthorUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)

    @field_validator("name")
    @classmethod
    def not_null(cls, v):
        return reject_null(v)


class AuthorResponse(CamelModel):
    id: int
    name: str
    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = None


class AuthorDetailResponse(AuthorResponse):
    quote_count: int = Field(description="Live quotes attributed to this author")
