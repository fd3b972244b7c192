"""
Meigen Backend — Catalogue Services (Categories, Subcategories, Authors)
=======================================================================

What:  Read/write access to the three catalogue tables with soft-delete
       semantics applied uniformly.
Why:   Route handlers stay thin; every rule about deleted rows, name
       conflicts and parent existence lives here.
How:   SoftDeleteService implements the shared contract once; the three
       subclasses add ordering and their entity-specific reads.

Contract (all entities):
    list()                 live rows, ordered by name
    get_by_id(id)          live row or None
    create(data)           new row; ConflictError on a duplicate unique name
    update(id, data)       None when absent or soft-deleted; stamps updated_at
    soft_delete(id)        sets deleted_at; None when absent or already deleted

Uniqueness is enforced by the database, not by a pre-check: two requests
racing on the same name both pass any SELECT, but only one INSERT wins.
The loser's IntegrityError becomes a ConflictError.
"""

import logging
from typing import Any, Dict, List, Optional, Type

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from meigen.exceptions import ConflictError, NotFoundError
from meigen.models.catalog import Author, Category, Subcategory
from meigen.models.filters import displayable, join_quote_parents, not_deleted
from meigen.models.quote import Quote
from meigen.models.types import utcnow
from meigen.schemas.catalog import (
    AuthorDetailResponse,
    AuthorResponse,
    CategoryDetailResponse,
    CategoryResponse,
    SubcategoryResponse,
    SubcategoryWithCategory,
)

logger = logging.getLogger(__name__)

class SoftDeleteService:
    """
    Generic CRUD over one soft-deletable model.

    Subclasses set `model`, `resource` (used in error messages) and
    `conflict_message`.
    """

    model: Type = None
    resource: str = "resource"
    conflict_message: str = "A record with this name already exists"

    def _order_by(self):
        return self.model.name

    async def list(self, db: AsyncSession) -> List[Any]:
        result = await db.execute(
            select(self.model).where(not_deleted(self.model)).order_by(self._order_by())
        )
        return list(result.scalars().all())

    async def get_by_id(self, db: AsyncSession, entity_id: int) -> Optional[Any]:
        result = await db.execute(
            select(self.model).where(
                self.model.id == entity_id,
                not_deleted(self.model),
            )
        )
        return result.scalar_one_or_none()

    async def create(self, db: AsyncSession, data: Dict[str, Any]) -> Any:
        await self._check_references(db, data)
        entity = self.model(**data)
        db.add(entity)
        await self._flush_or_conflict(db, data)
        logger.info("Created %s %s", self.resource, entity.id)
        return entity

    async def update(
        self, db: AsyncSession, entity_id: int, data: Dict[str, Any]
    ) -> Optional[Any]:
        entity = await self.get_by_id(db, entity_id)
        if entity is None:
            return None
        await self._check_references(db, data)
        for field, value in data.items():
            setattr(entity, field, value)
        entity.updated_at = utcnow()
        await self._flush_or_conflict(db, data)
        logger.info("Updated %s %s (%s)", self.resource, entity_id, ", ".join(data) or "touch")
        return entity

    async def soft_delete(self, db: AsyncSession, entity_id: int) -> Optional[Any]:
        entity = await self.get_by_id(db, entity_id)
        if entity is None:
            return None
        entity.deleted_at = utcnow()
        await db.flush()
        logger.info("Soft-deleted %s %s", self.resource, entity_id)
        return entity

    async def _check_references(self, db: AsyncSession, data: Dict[str, Any]) -> None:
        """Hook: raise NotFoundError when a referenced parent is missing or deleted."""
        return None

    async def _flush_or_conflict(self, db: AsyncSession, data: Dict[str, Any]) -> None:
        try:
            await db.flush()
        except IntegrityError as e:
            logger.warning(
                "Integrity error writing %s: %s", self.resource, e.orig,
            )
            raise ConflictError(
                message=self.conflict_message,
                context={"resource": self.resource, "name": data.get("name")},
            )

class CategoryService(SoftDeleteService):

    model = Category
    resource = "category"
    conflict_message = "A category with this name already exists"

    async def get_with_counts(
        self, db: AsyncSession, category_id: int
    ) -> Optional[CategoryDetailResponse]:
        """Live category plus the number of live subcategories under it."""
        category = await self.get_by_id(db, category_id)
        if category is None:
            return None
        result = await db.execute(
            select(func.count(Subcategory.id)).where(
                Subcategory.category_id == category_id,
                not_deleted(Subcategory),
            )
        )
        return CategoryDetailResponse(
            **CategoryResponse.model_validate(category).model_dump(),
            subcategory_count=result.scalar() or 0,
        )

class SubcategoryService(SoftDeleteService):
    """
    Subcategories are only visible while their category is live, so list()
    and get_with_category() join the parent; plain get_by_id() (used for
    update/delete) only looks at the subcategory's own deleted_at.
    """

    model = Subcategory
    resource = "subcategory"

    async def list_with_category(self, db: AsyncSession) -> List[SubcategoryWithCategory]:
        result = await db.execute(
            select(Subcategory, Category)
            .join(Category, Subcategory.category_id == Category.id)
            .where(not_deleted(Subcategory), not_deleted(Category))
            .order_by(Subcategory.name)
        )
        return [self._with_category(sub, cat) for sub, cat in result.all()]

    async def get_with_category(
        self, db: AsyncSession, subcategory_id: int
    ) -> Optional[SubcategoryWithCategory]:
        result = await db.execute(
            select(Subcategory, Category)
            .join(Category, Subcategory.category_id == Category.id)
            .where(
                Subcategory.id == subcategory_id,
                not_deleted(Subcategory),
                not_deleted(Category),
            )
        )
        row = result.first()
        if row is None:
            return None
        return self._with_category(*row)

    async def list_by_category(self, db: AsyncSession, category_id: int) -> List[Subcategory]:
        result = await db.execute(
            select(Subcategory)
            .where(Subcategory.category_id == category_id, not_deleted(Subcategory))
            .order_by(Subcategory.name)
        )
        return list(result.scalars().all())

    async def _check_references(self, db: AsyncSession, data: Dict[str, Any]) -> None:
        category_id = data.get("category_id")
        if category_id is not None and await category_service.get_by_id(db, category_id) is None:
            raise NotFoundError(resource="category", resource_id=category_id)

    @staticmethod
    def _with_category(subcategory: Subcategory, category: Category) -> SubcategoryWithCategory:
        return SubcategoryWithCategory(
            **SubcategoryResponse.model_validate(subcategory).model_dump(),
            category=CategoryResponse.model_validate(category),
        )

class AuthorService(SoftDeleteService):

    model = Author
    resource = "author"
    conflict_message = "An author with this name already exists"

    async def get_with_count(
        self, db: AsyncSession, author_id: int
    ) -> Optional[AuthorDetailResponse]:
        """Live author plus the number of live quotes attributed to them."""
        author = await self.get_by_id(db, author_id)
        if author is None:
            return None
        result = await db.execute(
            select(func.count(Quote.id)).where(
                Quote.author_id == author_id,
                not_deleted(Quote),
            )
        )
        return AuthorDetailResponse(
            **AuthorResponse.model_validate(author).model_dump(),
            quote_count=result.scalar() or 0,
        )

    async def list_by_category(
        self, db: AsyncSession, category_id: int
    ) -> List[AuthorDetailResponse]:
        """Authors with at least one displayable quote in the category, by name."""
        quote_count = func.count(func.distinct(Quote.id)).label("quote_count")
        stmt = join_quote_parents(
            select(Author, quote_count).select_from(Quote)
        ).where(
            Category.id == category_id,
            displayable(),
        ).group_by(Author.id).order_by(Author.name)
        result = await db.execute(stmt)
        return [
            AuthorDetailResponse(
                **AuthorResponse.model_validate(author).model_dump(),
                quote_count=count,
            )
            for author, count in result.all()
        ]


category_service = CategoryService()
subcategory_service = SubcategoryService()
author_service = AuthorService()
