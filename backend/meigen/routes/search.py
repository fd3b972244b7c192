"""
Meigen Backend — Search Route
=============================

    GET /api/search?q=...

    blank or whitespace-only q   → empty list (not an error)
    shorter than SEARCH_MIN_LENGTH as sent → VALIDATION_ERROR
    otherwise                    → up to SEARCH_RESULT_LIMIT matches for the
                                   trimmed q, newest first
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from meigen.config import settings
from meigen.database import get_db_session
from meigen.exceptions import ValidationError
from meigen.schemas.common import SuccessResponse, responses
from meigen.schemas.quote import QuoteDetailResponse
from meigen.services.quote_service import quote_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Search"])


@router.get(
    "/search",
    response_model=SuccessResponse[List[QuoteDetailResponse]],
    responses=responses(400),
    summary="Search quotes by text, translation or author name",
)
async def search_quotes(
    q: str = Query(default="", description="Substring to look for"),
    db: AsyncSession = Depends(get_db_session),
):
    query = q.strip()
    if not query:
        return SuccessResponse(data=[])
    if len(q) < settings.search_min_length:
        raise ValidationError(
            message=f"Search query must be at least {settings.search_min_length} characters",
            field="q",
        )
    return SuccessResponse(data=await quote_service.search(db, query))
