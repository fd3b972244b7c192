"""
Soft-delete predicates.

Every read in the service layer builds its WHERE clause from these helpers
instead of spelling out `deleted_at IS NULL` by hand, so the displayability
rule has exactly one definition:

    quote live AND author live AND subcategory live AND category live
"""

from sqlalchemy import Select, and_, select
from sqlalchemy.sql.elements import ColumnElement

from meigen.models.catalog import Author, Category, Subcategory
from meigen.models.quote import Quote


def not_deleted(model) -> ColumnElement[bool]:
    """`model.deleted_at IS NULL` for any soft-deletable model."""
    return model.deleted_at.is_(None)


def displayable() -> ColumnElement[bool]:
    """The four-way liveness condition for a quote and its parents."""
    return and_(
        not_deleted(Quote),
        not_deleted(Author),
        not_deleted(Subcategory),
        not_deleted(Category),
    )


def join_quote_parents(stmt: Select) -> Select:
    """Inner-join author, subcategory and category onto a statement over quotes."""
    return (
        stmt.join(Author, Quote.author_id == Author.id)
        .join(Subcategory, Quote.subcategory_id == Subcategory.id)
        .join(Category, Subcategory.category_id == Category.id)
    )


def displayable_quotes_query() -> Select:
    """SELECT quote, author, subcategory, category for every displayable quote."""
    stmt = select(Quote, Author, Subcategory, Category).select_from(Quote)
    return join_quote_parents(stmt).where(displayable())


def displayable_quote_ids_query() -> Select:
    """SELECT quote.id for every displayable quote."""
    return join_quote_parents(select(Quote.id).select_from(Quote)).where(displayable())
