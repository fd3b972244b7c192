"""
Meigen Backend — Category Routes
================================

Reads are public; POST/PUT/DELETE require an admin session. Besides plain
CRUD, a category exposes its live subcategories and the authors who have
displayable quotes in it.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from meigen.database import get_db_session
from meigen.exceptions import NotFoundError
from meigen.routes.deps import require_admin
from meigen.schemas.catalog import (
    AuthorDetailResponse,
    CategoryCreate,
    CategoryDetailResponse,
    CategoryResponse,
    CategoryUpdate,
    SubcategoryResponse,
)
from meigen.schemas.common import MessageResponse, SuccessResponse, responses
from meigen.services.catalog_service import (
    author_service,
    category_service,
    subcategory_service,
)

router = APIRouter(prefix="/api/categories", tags=["Categories"])


@router.get("", response_model=SuccessResponse[List[CategoryResponse]])
async def list_categories(db: AsyncSession = Depends(get_db_session)):
    categories = await category_service.list(db)
    return SuccessResponse(data=[CategoryResponse.model_validate(c) for c in categories])


@router.post(
    "",
    status_code=201,
    response_model=SuccessResponse[CategoryResponse],
    responses=responses(400, 401, 409),
    dependencies=[Depends(require_admin)],
)
async def create_category(body: CategoryCreate, db: AsyncSession = Depends(get_db_session)):
    category = await category_service.create(db, body.model_dump())
    return SuccessResponse(data=CategoryResponse.model_validate(category))


@router.get(
    "/{category_id}",
    response_model=SuccessResponse[CategoryDetailResponse],
    responses=responses(400, 404),
)
async def get_category(
    category_id: int,
    db: AsyncSession = Depends(get_db_session),
):
    category = await category_service.get_with_counts(db, category_id)
    if category is None:
        raise NotFoundError(resource="category", resource_id=category_id)
    return SuccessResponse(data=category)


@router.put(
    "/{category_id}",
    response_model=SuccessResponse[CategoryResponse],
    responses=responses(400, 401, 404, 409),
    dependencies=[Depends(require_admin)],
)
async def update_category(
    body: CategoryUpdate,
    category_id: int,
    db: AsyncSession = Depends(get_db_session),
):
    category = await category_service.update(
        db, category_id, body.model_dump(exclude_unset=True)
    )
    if category is None:
        raise NotFoundError(resource="category", resource_id=category_id)
    return SuccessResponse(data=CategoryResponse.model_validate(category))


@router.delete(
    "/{category_id}",
    response_model=SuccessResponse[MessageResponse],
    responses=responses(400, 401, 404),
    dependencies=[Depends(require_admin)],
)
async def delete_category(
    category_id: int,
    db: AsyncSession = Depends(get_db_session),
):
    if await category_service.soft_delete(db, category_id) is None:
        raise NotFoundError(resource="category", resource_id=category_id)
    return SuccessResponse(data=MessageResponse(message="Category deleted"))


@router.get(
    "/{category_id}/subcategories",
    response_model=SuccessResponse[List[SubcategoryResponse]],
    responses=responses(400, 404),
)
async def list_category_subcategories(
    category_id: int,
    db: AsyncSession = Depends(get_db_session),
):
    if await category_service.get_by_id(db, category_id) is None:
        raise NotFoundError(resource="category", resource_id=category_id)
    subcategories = await subcategory_service.list_by_category(db, category_id)
    return SuccessResponse(
        data=[SubcategoryResponse.model_validate(s) for s in subcategories]
    )


@router.get(
    "/{category_id}/authors",
    response_model=SuccessResponse[List[AuthorDetailResponse]],
    responses=responses(400, 404),
)
async def list_category_authors(
    category_id: int,
    db: AsyncSession = Depends(get_db_session),
):
    if await category_service.get_by_id(db, category_id) is None:
        raise NotFoundError(resource="category", resource_id=category_id)
    return SuccessResponse(data=await author_service.list_by_category(db, category_id))
