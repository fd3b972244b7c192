"""
ORM models. Importing this package registers every table on Base.metadata,
which create_all() and Alembic rely on.
"""

from meigen.models.catalog import Author, Category, Subcategory
from meigen.models.quote import DailyQuote, Quote
from meigen.models.session import AdminSession

__all__ = [
    "AdminSession",
    "Author",
    "Category",
    "DailyQuote",
    "Quote",
    "Subcategory",
]
