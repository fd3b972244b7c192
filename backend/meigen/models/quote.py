"""
Meigen Backend — Quote Models
==============================

What:  ORM models for `quotes` and the per-day featured set `daily_quotes`.

Quote:
    `text` holds the original wording, `text_ja` an optional Japanese
    translation and `background` optional context. A quote is displayable
    only while it, its author, its subcategory and that subcategory's
    category are all live (see models/filters.py).

DailyQuote:
    One row per (date, quote) pairing produced by a selection run. `date`
    is a plain YYYY-MM-DD string in UTC. The pair is unique, so a quote is
    featured at most once per day; the date index serves both the fetch and
    the delete-before-regenerate query.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from meigen.database import Base
from meigen.models.catalog import TimestampMixin
from meigen.models.types import EpochSeconds, utcnow


class Quote(TimestampMixin, Base):

    __tablename__ = "quotes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    text_ja: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    author_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("authors.id", ondelete="CASCADE"),
        nullable=False,
    )
    subcategory_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("subcategories.id", ondelete="CASCADE"),
        nullable=False,
    )
    background: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    __table_args__ = (
        Index("quotes_author_idx", "author_id"),
        Index("quotes_subcategory_idx", "subcategory_id"),
        Index("quotes_created_at_idx", "created_at"),
    )

    def __repr__(self) -> str:
        return (
            f"<Quote(id={self.id}, author_id={self.author_id}, "
            f"subcategory_id={self.subcategory_id})>"
        )


class DailyQuote(Base):

    __tablename__ = "daily_quotes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    date: Mapped[str] = mapped_column(String(10), nullable=False)
    quote_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("quotes.id", ondelete="CASCADE"),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        EpochSeconds, nullable=False, default=utcnow
    )

    __table_args__ = (
        Index("daily_quotes_date_quote_idx", "date", "quote_id", unique=True),
        Index("daily_quotes_date_idx", "date"),
    )

    def __repr__(self) -> str:
        return f"<DailyQuote(date='{self.date}', quote_id={self.quote_id})>"
