"""
Meigen Backend — Catalogue Models
==================================

What:  ORM models for the classification tree and the people quoted:
       `categories`, `subcategories` and `authors`.
Why:   Quotes hang off a subcategory (which belongs to a category) and an
       author; all three are soft-deletable so removing one hides its quotes
       without destroying history.

Table Design Rationale:
    - Integer autoincrement keys: ids appear in public URLs (/api/authors/3)
    - deleted_at NULL = live row; a timestamp = soft-deleted
    - Category and Author names are unique, including soft-deleted rows, so a
      re-created name conflicts until the old row is renamed
    - subcategories.category_id cascades on hard delete only
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from meigen.database import Base
from meigen.models.types import EpochSeconds, utcnow


class TimestampMixin:
    """created_at / updated_at / deleted_at columns shared by catalogue tables."""

    created_at: Mapped[datetime] = mapped_column(
        EpochSeconds, nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        EpochSeconds, nullable=False, default=utcnow
    )
    deleted_at: Mapped[Optional[datetime]] = mapped_column(
        EpochSeconds, nullable=True, default=None
    )


class Category(TimestampMixin, Base):
    """Top-level grouping, e.g. 偉人, アニメ, 映画."""

    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, name='{self.name}')>"


class Subcategory(TimestampMixin, Base):
    """Second-level grouping under a category, e.g. 哲学者 under 偉人."""

    __tablename__ = "subcategories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    category_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("categories.id", ondelete="CASCADE"),
        nullable=False,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)

    __table_args__ = (
        Index("subcategories_category_idx", "category_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<Subcategory(id={self.id}, category_id={self.category_id}, "
            f"name='{self.name}')>"
        )


class Author(TimestampMixin, Base):
    """The person (or character) a quote is attributed to."""

    __tablename__ = "authors"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False, unique=True)

    def __repr__(self) -> str:
        return f"<Author(id={self.id}, name='{self.name}')>"
