"""
Meigen Backend — Daily Quote Selector
=====================================

What:  Picks the featured set of quotes for a UTC calendar date and serves
       it back.
Why:   The public home page shows the same set to every visitor for the
       whole day; the set is regenerated once a day by the cron endpoint
       (or the `meigen-admin generate-daily` command).

Generation (generate):
    1. DELETE every daily_quotes row for the date, then COMMIT
    2. SELECT up to DAILY_QUOTE_COUNT displayable quote ids in random order
    3. INSERT one (date, quote_id) row per id

    Step 1 is committed on its own. If step 2 or 3 fails, the date is left
    with no assignments until the next successful run; readers see an empty
    list rather than a stale or partial one.

    Re-running for the same date replaces the set. Running it concurrently
    for the same date may interleave; the unique (date, quote_id) index
    rejects duplicate pairs but not two overlapping sets.

Reads (get):
    Assignments are filtered again at read time, so a quote deleted after
    selection disappears from the day's set without regeneration.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import delete, func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from meigen.config import settings
from meigen.models.filters import displayable_quote_ids_query, displayable_quotes_query
from meigen.models.quote import DailyQuote, Quote
from meigen.schemas.quote import QuoteDetailResponse

logger = logging.getLogger(__name__)


def today_utc() -> str:
    """Current UTC calendar date as YYYY-MM-DD."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%d")


class DailyQuoteService:

    async def generate(
        self, db: AsyncSession, date: Optional[str] = None, count: Optional[int] = None
    ) -> int:
        """
        Replace the assignments for `date` with a fresh random selection.

        Returns the number of assignments inserted:
        min(count, number of displayable quotes).
        """
        date = date or today_utc()
        count = settings.daily_quote_count if count is None else count

        result = await db.execute(delete(DailyQuote).where(DailyQuote.date == date))
        await db.commit()
        logger.info("Cleared %d daily assignments for %s", result.rowcount or 0, date)

        ids_result = await db.execute(
            displayable_quote_ids_query().order_by(func.random()).limit(count)
        )
        quote_ids = list(ids_result.scalars().all())
        if quote_ids:
            await db.execute(
                insert(DailyQuote),
                [{"date": date, "quote_id": quote_id} for quote_id in quote_ids],
            )
            await db.flush()

        logger.info("Generated %d daily quotes for %s", len(quote_ids), date)
        return len(quote_ids)

    async def get(
        self, db: AsyncSession, date: Optional[str] = None
    ) -> List[QuoteDetailResponse]:
        """Displayable quotes assigned to `date` (default: today in UTC)."""
        date = date or today_utc()
        stmt = (
            displayable_quotes_query()
            .join(DailyQuote, DailyQuote.quote_id == Quote.id)
            .where(DailyQuote.date == date)
            .order_by(DailyQuote.id)
        )
        result = await db.execute(stmt)
        return [QuoteDetailResponse.from_row(*row) for row in result.all()]

    async def exists(self, db: AsyncSession, date: str) -> bool:
        """True when at least one assignment row exists for `date`."""
        result = await db.execute(
            select(DailyQuote.id).where(DailyQuote.date == date).limit(1)
        )
        return result.first() is not None


daily_quote_service = DailyQuoteService()
