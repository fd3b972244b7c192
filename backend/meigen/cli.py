"""
meigen-admin: maintenance commands that run outside the HTTP server.

Usage:
    meigen-admin init-db
    meigen-admin seed
    meigen-admin generate-daily [--date YYYY-MM-DD]

Every command uses the same DATABASE_URL and services as the API.
"""

import argparse
import asyncio
import logging
import sys
from typing import Dict, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from meigen.database import create_all, dispose_engine, get_session_factory
from meigen.models.catalog import Author, Category, Subcategory
from meigen.models.quote import Quote
from meigen.schemas.quote import parse_iso_date
from meigen.seed_data import SEED_CATALOGUE
from meigen.services.daily_quote_service import daily_quote_service, today_utc

logger = logging.getLogger("meigen.cli")


# ══════════════════════════════════════════════════════════════════════════
# Commands
# ══════════════════════════════════════════════════════════════════════════

async def cmd_init_db(args: argparse.Namespace) -> int:
    await create_all()
    print("Tables created")
    return 0


async def _get_or_create(db: AsyncSession, model, **fields):
    """Row matching `fields`, inserted if missing. Returns (row, created)."""
    result = await db.execute(select(model).filter_by(**fields))
    row = result.scalars().first()
    if row is not None:
        return row, False
    row = model(**fields)
    db.add(row)
    await db.flush()
    return row, True


async def seed_catalogue(db: AsyncSession, catalogue: Optional[Dict] = None) -> Dict[str, int]:
    """
    Load a nested catalogue, skipping rows that already exist by name.

    Safe to run repeatedly. Returns how many rows of each kind were created.
    """
    catalogue = catalogue if catalogue is not None else SEED_CATALOGUE
    created = {"categories": 0, "subcategories": 0, "authors": 0, "quotes": 0}

    for category_name, subcategories in catalogue.items():
        category, new = await _get_or_create(db, Category, name=category_name)
        created["categories"] += new
        for subcategory_name, authors in subcategories.items():
            subcategory, new = await _get_or_create(
                db, Subcategory, category_id=category.id, name=subcategory_name
            )
            created["subcategories"] += new
            for author_name, quotes in authors.items():
                author, new = await _get_or_create(db, Author, name=author_name)
                created["authors"] += new
                for text, text_ja, background in quotes:
                    result = await db.execute(
                        select(Quote.id).where(Quote.author_id == author.id, Quote.text == text)
                    )
                    if result.first() is not None:
                        continue
                    db.add(Quote(
                        text=text,
                        text_ja=text_ja,
                        background=background,
                        author_id=author.id,
                        subcategory_id=subcategory.id,
                    ))
                    created["quotes"] += 1
    await db.flush()
    return created


async def cmd_seed(args: argparse.Namespace) -> int:
    async with get_session_factory()() as db:
        created = await seed_catalogue(db)
        await db.commit()
    print(
        "Seeded {categories} categories, {subcategories} subcategories, "
        "{authors} authors, {quotes} quotes".format(**created)
    )
    return 0


async def cmd_generate_daily(args: argparse.Namespace) -> int:
    date = args.date or today_utc()
    async with get_session_factory()() as db:
        count = await daily_quote_service.generate(db, date)
        await db.commit()
    print(f"Generated {count} daily quotes for {date}")
    return 0


# ══════════════════════════════════════════════════════════════════════════
# Entry Point
# ══════════════════════════════════════════════════════════════════════════

def _iso_date(value: str) -> str:
    try:
        return parse_iso_date(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="meigen-admin",
        description="Maintenance commands for the Meigen backend",
    )
    subparsers = parser.add_subparsers(dest="command")
    subparsers.required = True

    parser_init = subparsers.add_parser("init-db", help="Create all tables from the models")
    parser_init.set_defaults(func=cmd_init_db)

    parser_seed = subparsers.add_parser("seed", help="Load the sample catalogue (idempotent)")
    parser_seed.set_defaults(func=cmd_seed)

    parser_daily = subparsers.add_parser(
        "generate-daily", help="Regenerate the featured quotes for a day"
    )
    parser_daily.add_argument(
        "--date", type=_iso_date, help="UTC date YYYY-MM-DD (default: today)"
    )
    parser_daily.set_defaults(func=cmd_generate_daily)

    return parser


async def _run(args: argparse.Namespace) -> int:
    try:
        return await args.func(args)
    finally:
        await dispose_engine()


def main(argv=None) -> int:
    from meigen.main import setup_logging

    setup_logging()
    args = build_parser().parse_args(argv)
    try:
        return asyncio.run(_run(args))
    except Exception as e:
        logger.error("%s failed: %s", args.command, e, exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
