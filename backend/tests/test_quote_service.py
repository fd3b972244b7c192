"""
Meigen Backend — Quote Service Tests
====================================

What we test:
    ✅ Reads apply the four-way display filter
    ✅ Listing is newest first and filterable by parent
    ✅ search() matches text, text_ja and author name, case-insensitively
    ✅ search() treats % and _ literally
    ✅ Writes check that author and subcategory are live
    ✅ soft_delete twice → entity, then None
"""

from datetime import timedelta

import pytest

from meigen.exceptions import NotFoundError
from meigen.models.types import utcnow
from meigen.services.catalog_service import author_service, category_service, subcategory_service
from meigen.services.quote_service import QuoteService


class TestQuoteReads:

    def setup_method(self):
        self.service = QuoteService()

    @pytest.mark.asyncio
    async def test_get_by_id_embeds_parents(self, db_session, catalogue):
        quote = await self.service.get_by_id(db_session, catalogue.wisdom.id)

        assert quote.text_ja == "無知の知こそが真の知恵である。"
        assert quote.author.name == "ソクラテス"
        assert quote.subcategory.name == "哲学者"
        assert quote.subcategory.category.name == "偉人"

    @pytest.mark.asyncio
    async def test_list_is_newest_first(self, db_session, catalogue):
        catalogue.wisdom.created_at = utcnow() + timedelta(minutes=5)
        catalogue.hungry.created_at = utcnow() - timedelta(days=1)
        await db_session.flush()

        ids = [q.id for q in await self.service.list(db_session)]
        assert ids == [catalogue.wisdom.id, catalogue.imagination.id, catalogue.hungry.id]

    @pytest.mark.asyncio
    async def test_list_filters(self, db_session, catalogue):
        by_category = await self.service.get_by_category(db_session, catalogue.great.id)
        assert {q.id for q in by_category} == {catalogue.wisdom.id, catalogue.imagination.id}

        by_author = await self.service.get_by_author(db_session, catalogue.jobs.id)
        assert [q.id for q in by_author] == [catalogue.hungry.id]

        by_subcategory = await self.service.get_by_subcategory(
            db_session, catalogue.scientists.id
        )
        assert [q.id for q in by_subcategory] == [catalogue.imagination.id]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("parent", ["author", "subcategory", "category"])
    async def test_deleted_parent_hides_quote(self, db_session, catalogue, parent):
        if parent == "author":
            await author_service.soft_delete(db_session, catalogue.socrates.id)
        elif parent == "subcategory":
            await subcategory_service.soft_delete(db_session, catalogue.philosophers.id)
        else:
            await category_service.soft_delete(db_session, catalogue.great.id)

        assert await self.service.get_by_id(db_session, catalogue.wisdom.id) is None
        assert catalogue.wisdom.id not in {q.id for q in await self.service.list(db_session)}


class TestQuoteSearch:

    def setup_method(self):
        self.service = QuoteService()

    @pytest.mark.asyncio
    async def test_single_character_japanese_match(self, db_session, catalogue):
        results = await self.service.search(db_session, "知")

        # 無知の知 (wisdom) and 知識 (imagination) both contain 知
        assert {q.id for q in results} == {catalogue.wisdom.id, catalogue.imagination.id}

    @pytest.mark.asyncio
    async def test_deleting_author_hides_result(self, db_session, catalogue):
        await author_service.soft_delete(db_session, catalogue.socrates.id)
        await self.service.soft_delete(db_session, catalogue.imagination.id)

        assert await self.service.search(db_session, "知") == []

    @pytest.mark.asyncio
    async def test_matches_author_name(self, db_session, catalogue):
        results = await self.service.search(db_session, "ジョブズ")
        assert [q.id for q in results] == [catalogue.hungry.id]

    @pytest.mark.asyncio
    async def test_case_insensitive(self, db_session, catalogue):
        results = await self.service.search(db_session, "STAY HUNGRY")
        assert [q.id for q in results] == [catalogue.hungry.id]

    @pytest.mark.asyncio
    async def test_wildcards_are_literal(self, db_session, catalogue):
        assert await self.service.search(db_session, "%") == []
        assert await self.service.search(db_session, "_") == []

    @pytest.mark.asyncio
    async def test_result_limit(self, db_session, catalogue, monkeypatch):
        from meigen.config import settings

        monkeypatch.setattr(settings, "search_result_limit", 1)
        assert len(await self.service.search(db_session, "知")) == 1


class TestQuoteWrites:

    def setup_method(self):
        self.service = QuoteService()

    @pytest.mark.asyncio
    async def test_create_requires_live_author(self, db_session, catalogue):
        await author_service.soft_delete(db_session, catalogue.jobs.id)
        with pytest.raises(NotFoundError):
            await self.service.create(db_session, {
                "text": "Innovation distinguishes between a leader and a follower.",
                "author_id": catalogue.jobs.id,
                "subcategory_id": catalogue.founders.id,
            })

    @pytest.mark.asyncio
    async def test_create_requires_live_subcategory(self, db_session, catalogue):
        with pytest.raises(NotFoundError):
            await self.service.create(db_session, {
                "text": "x",
                "author_id": catalogue.jobs.id,
                "subcategory_id": 999,
            })

    @pytest.mark.asyncio
    async def test_partial_update(self, db_session, catalogue):
        updated = await self.service.update(
            db_session, catalogue.hungry.id, {"background": "Stanford, 2005"}
        )

        assert updated.background == "Stanford, 2005"
        assert updated.text == "Stay hungry, stay foolish."

    @pytest.mark.asyncio
    async def test_soft_delete_twice(self, db_session, catalogue):
        first = await self.service.soft_delete(db_session, catalogue.hungry.id)
        assert first is not None
        assert first.deleted_at is not None

        assert await self.service.soft_delete(db_session, catalogue.hungry.id) is None
        assert await self.service.update(db_session, catalogue.hungry.id, {"text": "x"}) is None


class TestSearchScenario:
    """偉人 / 哲学者 / ソクラテス / "無知の知" on an otherwise empty store."""

    @pytest.mark.asyncio
    async def test_search_then_delete_author(self, db_session):
        service = QuoteService()
        category = await category_service.create(db_session, {"name": "偉人"})
        subcategory = await subcategory_service.create(
            db_session, {"category_id": category.id, "name": "哲学者"}
        )
        author = await author_service.create(db_session, {"name": "ソクラテス"})
        quote = await service.create(db_session, {
            "text": "無知の知",
            "author_id": author.id,
            "subcategory_id": subcategory.id,
        })

        assert [q.id for q in await service.search(db_session, "知")] == [quote.id]

        await author_service.soft_delete(db_session, author.id)
        assert await service.search(db_session, "知") == []
