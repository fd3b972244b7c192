"""
Meigen Backend — Daily Quote Selector Tests
===========================================

What we test:
    ✅ generate() inserts min(N, displayable) distinct quotes
    ✅ Regeneration replaces the previous set
    ✅ Soft-deleted quotes and parents are never selected
    ✅ get() drops quotes whose parents are deleted after generation
    ✅ Empty pool → 0, not an error
    ✅ The delete is committed before the insert (a failed insert leaves the day empty)
    ✅ exists() ignores the display filter
"""

import pytest
from sqlalchemy import select
from sqlalchemy.sql.dml import Insert

from meigen.config import settings
from meigen.models.quote import DailyQuote
from meigen.services.catalog_service import author_service, category_service
from meigen.services.daily_quote_service import DailyQuoteService, today_utc
from meigen.services.quote_service import quote_service

DAY = "2026-01-15"


async def assigned_ids(db, date=DAY):
    result = await db.execute(select(DailyQuote.quote_id).where(DailyQuote.date == date))
    return list(result.scalars().all())


async def add_quotes(db, catalogue, count):
    for i in range(count):
        await quote_service.create(db, {
            "text": f"Filler quote number {i}",
            "author_id": catalogue.socrates.id,
            "subcategory_id": catalogue.philosophers.id,
        })
    await db.commit()


class TestGenerate:

    def setup_method(self):
        self.service = DailyQuoteService()

    @pytest.mark.asyncio
    async def test_fewer_quotes_than_n_selects_all(self, db_session, catalogue):
        await add_quotes(db_session, catalogue, 2)  # 3 + 2 = 5 displayable

        count = await self.service.generate(db_session, DAY)
        await db_session.commit()

        assert count == 5
        ids = await assigned_ids(db_session)
        assert len(ids) == 5
        assert len(set(ids)) == 5

    @pytest.mark.asyncio
    async def test_caps_at_n_with_distinct_ids(self, db_session, catalogue):
        await add_quotes(db_session, catalogue, 10)

        count = await self.service.generate(db_session, DAY, count=4)
        await db_session.commit()

        ids = await assigned_ids(db_session)
        assert count == 4
        assert len(ids) == 4
        assert len(set(ids)) == 4

    @pytest.mark.asyncio
    async def test_configured_count_caps_selection(self, db_session, catalogue, monkeypatch):
        monkeypatch.setattr(settings, "daily_quote_count", 4)
        await add_quotes(db_session, catalogue, 10)

        count = await self.service.generate(db_session, DAY)
        await db_session.commit()

        ids = await assigned_ids(db_session)
        assert count == 4
        assert len(set(ids)) == 4

    @pytest.mark.asyncio
    async def test_regenerate_replaces_previous_set(self, db_session, catalogue):
        await add_quotes(db_session, catalogue, 10)

        await self.service.generate(db_session, DAY, count=5)
        await self.service.generate(db_session, DAY, count=5)
        await db_session.commit()

        assert len(await assigned_ids(db_session)) == 5

    @pytest.mark.asyncio
    async def test_other_dates_untouched(self, db_session, catalogue):
        await self.service.generate(db_session, "2026-01-14")
        await self.service.generate(db_session, DAY)
        await db_session.commit()

        assert len(await assigned_ids(db_session, "2026-01-14")) == 3
        assert len(await assigned_ids(db_session, DAY)) == 3

    @pytest.mark.asyncio
    async def test_excludes_deleted_quotes_and_parents(self, db_session, catalogue):
        await quote_service.soft_delete(db_session, catalogue.wisdom.id)
        await author_service.soft_delete(db_session, catalogue.einstein.id)
        await db_session.commit()

        count = await self.service.generate(db_session, DAY)

        assert count == 1
        assert await assigned_ids(db_session) == [catalogue.hungry.id]

    @pytest.mark.asyncio
    async def test_empty_pool_is_not_an_error(self, db_session):
        assert await self.service.generate(db_session, DAY) == 0
        assert await self.service.exists(db_session, DAY) is False

    @pytest.mark.asyncio
    async def test_defaults_to_today(self, db_session, catalogue):
        await self.service.generate(db_session)
        await db_session.commit()

        assert await self.service.exists(db_session, today_utc()) is True

    @pytest.mark.asyncio
    async def test_failed_insert_leaves_date_empty(self, db_session, catalogue, monkeypatch):
        await self.service.generate(db_session, DAY)
        await db_session.commit()
        assert await self.service.exists(db_session, DAY) is True

        real_execute = db_session.execute

        async def failing_execute(statement, *args, **kwargs):
            if isinstance(statement, Insert):
                raise RuntimeError("insert failed")
            return await real_execute(statement, *args, **kwargs)

        monkeypatch.setattr(db_session, "execute", failing_execute)
        with pytest.raises(RuntimeError):
            await self.service.generate(db_session, DAY)
        monkeypatch.undo()
        await db_session.rollback()

        # the delete was committed on its own, so the old set is gone
        assert await self.service.exists(db_session, DAY) is False


class TestGet:

    def setup_method(self):
        self.service = DailyQuoteService()

    @pytest.mark.asyncio
    async def test_returns_joined_quotes(self, db_session, catalogue):
        await self.service.generate(db_session, DAY)
        await db_session.commit()

        quotes = await self.service.get(db_session, DAY)

        assert {q.id for q in quotes} == {
            catalogue.wisdom.id, catalogue.imagination.id, catalogue.hungry.id,
        }
        wisdom = next(q for q in quotes if q.id == catalogue.wisdom.id)
        assert wisdom.author.name == "ソクラテス"
        assert wisdom.subcategory.name == "哲学者"
        assert wisdom.subcategory.category.name == "偉人"

    @pytest.mark.asyncio
    async def test_parent_deleted_after_generation_is_hidden(self, db_session, catalogue):
        await self.service.generate(db_session, DAY)
        await category_service.soft_delete(db_session, catalogue.great.id)
        await db_session.commit()

        quotes = await self.service.get(db_session, DAY)

        assert [q.id for q in quotes] == [catalogue.hungry.id]
        # the assignment rows themselves are untouched
        assert await self.service.exists(db_session, DAY) is True
        assert len(await assigned_ids(db_session)) == 3

    @pytest.mark.asyncio
    async def test_unknown_date_is_empty(self, db_session, catalogue):
        assert await self.service.get(db_session, "1999-12-31") == []
