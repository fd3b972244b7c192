"""
Meigen Backend — Subcategory Routes
===================================

Reads embed the parent category and hide subcategories whose category has
been soft-deleted. Writes require an admin session; a categoryId that
points at a missing or deleted category is answered with 404.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from meigen.database import get_db_session
from meigen.exceptions import NotFoundError
from meigen.routes.deps import require_admin
from meigen.schemas.catalog import (
    SubcategoryCreate,
    SubcategoryResponse,
    SubcategoryUpdate,
    SubcategoryWithCategory,
)
from meigen.schemas.common import MessageResponse, SuccessResponse, responses
from meigen.services.catalog_service import subcategory_service

router = APIRouter(prefix="/api/subcategories", tags=["Subcategories"])


@router.get("", response_model=SuccessResponse[List[SubcategoryWithCategory]])
async def list_subcategories(db: AsyncSession = Depends(get_db_session)):
    return SuccessResponse(data=await subcategory_service.list_with_category(db))


@router.post(
    "",
    status_code=201,
    response_model=SuccessResponse[SubcategoryResponse],
    responses=responses(400, 401, 404),
    dependencies=[Depends(require_admin)],
)
async def create_subcategory(
    body: SubcategoryCreate,
    db: AsyncSession = Depends(get_db_session),
):
    subcategory = await subcategory_service.create(db, body.model_dump())
    return SuccessResponse(data=SubcategoryResponse.model_validate(subcategory))


@router.get(
    "/{subcategory_id}",
    response_model=SuccessResponse[SubcategoryWithCategory],
    responses=responses(400, 404),
)
async def get_subcategory(
    subcategory_id: int,
    db: AsyncSession = Depends(get_db_session),
):
    subcategory = await subcategory_service.get_with_category(db, subcategory_id)
    if subcategory is None:
        raise NotFoundError(resource="subcategory", resource_id=subcategory_id)
    return SuccessResponse(data=subcategory)


@router.patch(
    "/{subcategory_id}",
    response_model=SuccessResponse[SubcategoryResponse],
    responses=responses(400, 401, 404),
    dependencies=[Depends(require_admin)],
)
async def update_subcategory(
    body: SubcategoryUpdate,
    subcategory_id: int,
    db: AsyncSession = Depends(get_db_session),
):
    subcategory = await subcategory_service.update(
        db, subcategory_id, body.model_dump(exclude_unset=True)
    )
    if subcategory is None:
        raise NotFoundError(resource="subcategory", resource_id=subcategory_id)
    return SuccessResponse(data=SubcategoryResponse.model_validate(subcategory))


@router.delete(
    "/{subcategory_id}",
    response_model=SuccessResponse[MessageResponse],
    responses=responses(400, 401, 404),
    dependencies=[Depends(require_admin)],
)
async def delete_subcategory(
    subcategory_id: int,
    db: AsyncSession = Depends(get_db_session),
):
    if await subcategory_service.soft_delete(db, subcategory_id) is None:
        raise NotFoundError(resource="subcategory", resource_id=subcategory_id)
    return SuccessResponse(data=MessageResponse(message="Subcategory deleted"))
