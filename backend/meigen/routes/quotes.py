"""
Meigen Backend — Quote Routes
=============================

Every read returns QuoteDetailResponse (quote + author + subcategory with
its category) and only ever includes displayable quotes. Writes require an
admin session and return the bare quote row.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from meigen.database import get_db_session
from meigen.exceptions import NotFoundError
from meigen.routes.deps import require_admin
from meigen.schemas.common import MessageResponse, SuccessResponse, responses
from meigen.schemas.quote import QuoteCreate, QuoteDetailResponse, QuoteResponse, QuoteUpdate
from meigen.services.quote_service import quote_service

router = APIRouter(prefix="/api/quotes", tags=["Quotes"])


@router.get(
    "",
    response_model=SuccessResponse[List[QuoteDetailResponse]],
    responses=responses(400),
    summary="List displayable quotes, newest first",
)
async def list_quotes(
    subcategory_id: Optional[int] = Query(default=None, alias="subcategoryId"),
    author_id: Optional[int] = Query(default=None, alias="authorId"),
    category_id: Optional[int] = Query(default=None, alias="categoryId"),
    db: AsyncSession = Depends(get_db_session),
):
    quotes = await quote_service.list(
        db,
        subcategory_id=subcategory_id,
        author_id=author_id,
        category_id=category_id,
    )
    return SuccessResponse(data=quotes)


@router.post(
    "",
    status_code=201,
    response_model=SuccessResponse[QuoteResponse],
    responses=responses(400, 401, 404),
    dependencies=[Depends(require_admin)],
)
async def create_quote(body: QuoteCreate, db: AsyncSession = Depends(get_db_session)):
    quote = await quote_service.create(db, body.model_dump())
    return SuccessResponse(data=QuoteResponse.model_validate(quote))


@router.get(
    "/{quote_id}",
    response_model=SuccessResponse[QuoteDetailResponse],
    responses=responses(400, 404),
)
async def get_quote(quote_id: int, db: AsyncSession = Depends(get_db_session)):
    quote = await quote_service.get_by_id(db, quote_id)
    if quote is None:
        raise NotFoundError(resource="quote", resource_id=quote_id)
    return SuccessResponse(data=quote)


@router.patch(
    "/{quote_id}",
    response_model=SuccessResponse[QuoteResponse],
    responses=responses(400, 401, 404),
    dependencies=[Depends(require_admin)],
)
async def update_quote(
    body: QuoteUpdate,
    quote_id: int,
    db: AsyncSession = Depends(get_db_session),
):
    quote = await quote_service.update(db, quote_id, body.model_dump(exclude_unset=True))
    if quote is None:
        raise NotFoundError(resource="quote", resource_id=quote_id)
    return SuccessResponse(data=QuoteResponse.model_validate(quote))


@router.delete(
    "/{quote_id}",
    response_model=SuccessResponse[MessageResponse],
    responses=responses(400, 401, 404),
    dependencies=[Depends(require_admin)],
)
async def delete_quote(quote_id: int, db: AsyncSession = Depends(get_db_session)):
    if await quote_service.soft_delete(db, quote_id) is None:
        raise NotFoundError(resource="quote", resource_id=quote_id)
    return SuccessResponse(data=MessageResponse(message="Quote deleted"))
