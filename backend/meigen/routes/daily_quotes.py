"""
Meigen Backend — Daily Quote Routes
===================================

    GET /api/daily-quotes?date=YYYY-MM-DD   featured set (default or empty: today, UTC)
    GET /api/cron/daily-quotes              regenerate today's set

The cron route is called by an external scheduler with
`Authorization: Bearer <CRON_SECRET>`. It is a GET because most hosted
schedulers can only issue GETs.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from meigen.database import get_db_session
from meigen.exceptions import ValidationError
from meigen.routes.deps import require_cron_secret
from meigen.schemas.common import SuccessResponse, responses
from meigen.schemas.quote import DailyGenerationResponse, QuoteDetailResponse, parse_iso_date
from meigen.services.daily_quote_service import daily_quote_service, today_utc

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Daily Quotes"])


@router.get(
    "/daily-quotes",
    response_model=SuccessResponse[List[QuoteDetailResponse]],
    responses=responses(400),
    summary="Quotes featured on a given day",
)
async def get_daily_quotes(
    date: Optional[str] = Query(default=None, description="UTC date, YYYY-MM-DD"),
    db: AsyncSession = Depends(get_db_session),
):
    # ?date= with no value means today
    date = date or None
    if date is not None:
        try:
            parse_iso_date(date)
        except ValueError as e:
            raise ValidationError(message=str(e), field="date")
    return SuccessResponse(data=await daily_quote_service.get(db, date))


@router.get(
    "/cron/daily-quotes",
    response_model=SuccessResponse[DailyGenerationResponse],
    responses=responses(401, 500),
    dependencies=[Depends(require_cron_secret)],
    summary="Regenerate today's featured quotes (scheduler only)",
)
async def generate_daily_quotes(db: AsyncSession = Depends(get_db_session)):
    date = today_utc()
    count = await daily_quote_service.generate(db, date)
    logger.info("Cron generated %d daily quotes for %s", count, date)
    return SuccessResponse(
        data=DailyGenerationResponse(
            message=f"Generated {count} daily quotes",
            date=date,
            count=count,
        )
    )
