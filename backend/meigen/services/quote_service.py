"""
Meigen Backend — Quote Service
==============================

What:  Quote reads (always joined with author, subcategory and category),
       substring search, and admin writes.
Why:   A quote is only shown while it and all three of its parents are
       live. Every public read here goes through displayable_quotes_query()
       so that rule cannot be forgotten on one endpoint.
How:   Reads return QuoteDetailResponse built from the four-table join.
       Writes operate on the bare Quote row and return it.

Ordering:
    Quote listings are newest first (created_at DESC, id DESC as tiebreak).
    Search results are capped at SEARCH_RESULT_LIMIT.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from meigen.config import settings
from meigen.exceptions import NotFoundError
from meigen.models.catalog import Author, Category
from meigen.models.filters import displayable_quotes_query, not_deleted
from meigen.models.quote import Quote
from meigen.models.types import utcnow
from meigen.schemas.quote import QuoteDetailResponse
from meigen.services.catalog_service import author_service, subcategory_service

logger = logging.getLogger(__name__)


def _like_pattern(query: str) -> str:
    """Wrap in % wildcards, escaping LIKE metacharacters in the user input."""
    escaped = query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class QuoteService:

    def _newest_first(self, stmt):
        return stmt.order_by(Quote.created_at.desc(), Quote.id.desc())

    async def _fetch(self, db: AsyncSession, stmt) -> List[QuoteDetailResponse]:
        result = await db.execute(stmt)
        return [QuoteDetailResponse.from_row(*row) for row in result.all()]

    async def list(
        self,
        db: AsyncSession,
        subcategory_id: Optional[int] = None,
        author_id: Optional[int] = None,
        category_id: Optional[int] = None,
    ) -> List[QuoteDetailResponse]:
        """All displayable quotes, optionally narrowed by any combination of parents."""
        stmt = displayable_quotes_query()
        if subcategory_id is not None:
            stmt = stmt.where(Quote.subcategory_id == subcategory_id)
        if author_id is not None:
            stmt = stmt.where(Quote.author_id == author_id)
        if category_id is not None:
            stmt = stmt.where(Category.id == category_id)
        return await self._fetch(db, self._newest_first(stmt))

    async def get_by_id(self, db: AsyncSession, quote_id: int) -> Optional[QuoteDetailResponse]:
        result = await db.execute(displayable_quotes_query().where(Quote.id == quote_id))
        row = result.first()
        if row is None:
            return None
        return QuoteDetailResponse.from_row(*row)

    async def get_by_subcategory(self, db: AsyncSession, subcategory_id: int):
        return await self.list(db, subcategory_id=subcategory_id)

    async def get_by_author(self, db: AsyncSession, author_id: int):
        return await self.list(db, author_id=author_id)

    async def get_by_category(self, db: AsyncSession, category_id: int):
        return await self.list(db, category_id=category_id)

    async def search(self, db: AsyncSession, query: str) -> List[QuoteDetailResponse]:
        """
        Case-insensitive substring match on the quote text, its Japanese
        translation, or the author's name.

        Length rules on `query` are enforced by the route; this method
        searches for whatever it is given.
        """
        pattern = _like_pattern(query)
        stmt = displayable_quotes_query().where(
            or_(
                Quote.text.ilike(pattern, escape="\\"),
                Quote.text_ja.ilike(pattern, escape="\\"),
                Author.name.ilike(pattern, escape="\\"),
            )
        )
        stmt = self._newest_first(stmt).limit(settings.search_result_limit)
        results = await self._fetch(db, stmt)
        logger.debug("Search %r matched %d quotes", query, len(results))
        return results

    # ── Admin writes ────────────────────────────────────────────────────

    async def _get_live(self, db: AsyncSession, quote_id: int) -> Optional[Quote]:
        result = await db.execute(
            select(Quote).where(Quote.id == quote_id, not_deleted(Quote))
        )
        return result.scalar_one_or_none()

    async def _check_references(self, db: AsyncSession, data: Dict[str, Any]) -> None:
        author_id = data.get("author_id")
        if author_id is not None and await author_service.get_by_id(db, author_id) is None:
            raise NotFoundError(resource="author", resource_id=author_id)
        subcategory_id = data.get("subcategory_id")
        if (
            subcategory_id is not None
            and await subcategory_service.get_by_id(db, subcategory_id) is None
        ):
            raise NotFoundError(resource="subcategory", resource_id=subcategory_id)

    async def create(self, db: AsyncSession, data: Dict[str, Any]) -> Quote:
        await self._check_references(db, data)
        quote = Quote(**data)
        db.add(quote)
        await db.flush()
        logger.info(
            "Created quote %s (author=%s, subcategory=%s)",
            quote.id, quote.author_id, quote.subcategory_id,
        )
        return quote

    async def update(
        self, db: AsyncSession, quote_id: int, data: Dict[str, Any]
    ) -> Optional[Quote]:
        quote = await self._get_live(db, quote_id)
        if quote is None:
            return None
        await self._check_references(db, data)
        for field, value in data.items():
            setattr(quote, field, value)
        quote.updated_at = utcnow()
        await db.flush()
        logger.info("Updated quote %s", quote_id)
        return quote

    async def soft_delete(self, db: AsyncSession, quote_id: int) -> Optional[Quote]:
        quote = await self._get_live(db, quote_id)
        if quote is None:
            return None
        quote.deleted_at = utcnow()
        await db.flush()
        logger.info("Soft-deleted quote %s", quote_id)
        return quote


quote_service = QuoteService()
