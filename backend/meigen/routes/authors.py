"""
Meigen Backend — Author Routes
==============================
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from meigen.database import get_db_session
from meigen.exceptions import NotFoundError
from meigen.routes.deps import require_admin
from meigen.schemas.catalog import (
    AuthorCreate,
    AuthorDetailResponse,
    AuthorResponse,
    AuthorUpdate,
)
from meigen.schemas.common import MessageResponse, SuccessResponse, responses
from meigen.services.catalog_service import author_service

router = APIRouter(prefix="/api/authors", tags=["Authors"])


@router.get("", response_model=SuccessResponse[List[AuthorResponse]])
async def list_authors(db: AsyncSession = Depends(get_db_session)):
    authors = await author_service.list(db)
    return SuccessResponse(data=[AuthorResponse.model_validate(a) for a in authors])


@router.post(
    "",
    status_code=201,
    response_model=SuccessResponse[AuthorResponse],
    responses=responses(400, 401, 409),
    dependencies=[Depends(require_admin)],
)
async def create_author(body: AuthorCreate, db: AsyncSession = Depends(get_db_session)):
    author = await author_service.create(db, body.model_dump())
    return SuccessResponse(data=AuthorResponse.model_validate(author))


@router.get(
    "/{author_id}",
    response_model=SuccessResponse[AuthorDetailResponse],
    responses=responses(400, 404),
)
async def get_author(author_id: int, db: AsyncSession = Depends(get_db_session)):
    author = await author_service.get_with_count(db, author_id)
    if author is None:
        raise NotFoundError(resource="author", resource_id=author_id)
    return SuccessResponse(data=author)


@router.patch(
    "/{author_id}",
    response_model=SuccessResponse[AuthorResponse],
    responses=responses(400, 401, 404, 409),
    dependencies=[Depends(require_admin)],
)
async def update_author(
    body: AuthorUpdate,
    author_id: int,
    db: AsyncSession = Depends(get_db_session),
):
    author = await author_service.update(db, author_id, body.model_dump(exclude_unset=True))
    if author is None:
        raise NotFoundError(resource="author", resource_id=author_id)
    return SuccessResponse(data=AuthorResponse.model_validate(author))


@router.delete(
    "/{author_id}",
    response_model=SuccessResponse[MessageResponse],
    responses=responses(400, 401, 404),
    dependencies=[Depends(require_admin)],
)
async def delete_author(author_id: int, db: AsyncSession = Depends(get_db_session)):
    if await author_service.soft_delete(db, author_id) is None:
        raise NotFoundError(resource="author", resource_id=author_id)
    return SuccessResponse(data=MessageResponse(message="Author deleted"))
