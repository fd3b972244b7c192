"""
Meigen Backend — Quote, Daily Quote & Session Schemas
======================================================

QuoteDetailResponse is the shape every quote read returns: the quote row
with its author and its subcategory (which in turn embeds its category).
"""

import re
from datetime import date as date_type, datetime
from typing import Optional

from pydantic import Field, field_validator

from meigen.schemas.catalog import (
    AuthorResponse,
    CategoryResponse,
    SubcategoryResponse,
    SubcategoryWithCategory,
    reject_null,
)
from meigen.schemas.common import CamelModel

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_iso_date(value: str) -> str:
    """
    Validate a YYYY-MM-DD string and return it unchanged.

    Raises ValueError for anything else, including impossible dates
    such as 2024-02-30.
    """
    if not DATE_PATTERN.match(value):
        raise ValueError("date must be in YYYY-MM-DD format")
    date_type.fromisoformat(value)
    return value


# ══════════════════════════════════════════════════════════════════════════
# Quote
# ══════════════════════════════════════════════════════════════════════════

class QuoteCreate(CamelModel):
    text: str = Field(min_length=1, max_length=1000, description="Original wording")
    text_ja: Optional[str] = Field(default=None, max_length=1000, description="Japanese translation")
    author_id: int = Field(gt=0)
    subcategory_id: int = Field(gt=0)
    background: Optional[str] = Field(default=None, max_length=2000)


class QuoteUpdate(CamelModel):
    text: Optional[str] = Field(default=None, min_length=1, max_length=1000)
    text_ja: Optional[str] = Field(default=None, max_length=1000)
    author_id: Optional[int] = Field(default=None, gt=0)
    subcategory_id: Optional[int] = Field(default=None, gt=0)
    background: Optional[str] = Field(default=None, max_length=2000)

    # text_ja and background may be cleared with an explicit null
    @field_validator("text", "author_id", "subcategory_id")
    @classmethod
    def not_null(cls, v):
        return reject_null(v)


class QuoteResponse(CamelModel):
    id: int
    text: str
    text_ja: Optional[str] = None
    author_id: int
    subcategory_id: int
    background: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = None


class QuoteDetailResponse(QuoteResponse):
    author: AuthorResponse
    subcategory: SubcategoryWithCategory

    @classmethod
    def from_row(cls, quote, author, subcategory, category) -> "QuoteDetailResponse":
        """Assemble from one (Quote, Author, Subcategory, Category) join row."""
        return cls(
            **QuoteResponse.model_validate(quote).model_dump(),
            author=AuthorResponse.model_validate(author),
            subcategory=SubcategoryWithCategory(
                **SubcategoryResponse.model_validate(subcategory).model_dump(),
                category=CategoryResponse.model_validate(category),
            ),
        )


# ══════════════════════════════════════════════════════════════════════════
# Daily Quotes
# ══════════════════════════════════════════════════════════════════════════

class DailyGenerationResponse(CamelModel):
    message: str
    date: str = Field(description="UTC calendar date the set was generated for")
    count: int = Field(description="Assignments inserted (at most DAILY_QUOTE_COUNT)")


# ══════════════════════════════════════════════════════════════════════════
# Admin Session
# ══════════════════════════════════════════════════════════════════════════

class LoginRequest(CamelModel):
    password: str = Field(min_length=1, description="Shared admin password")


class LoginResponse(CamelModel):
    message: str
    expires_at: datetime
