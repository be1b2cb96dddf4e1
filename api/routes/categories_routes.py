"""Category endpoints."""

from fastapi import APIRouter, Request, Response
from starlette import status

from core.database import DbSession
from core.ratelimit import WRITE_LIMIT, limiter
from routes.errors import (
    conflict_http_error,
    not_found_http_error,
    validation_http_error,
)
from schemas import (
    CategoryCreateRequest,
    CategoryDetailResponse,
    CategoryResponse,
    CategoryUpdateRequest,
    CategoryWithCountResponse,
    ValidationErrorResponse,
)
from services.categories_service import (
    create_category,
    delete_category,
    get_category,
    list_categories,
    update_category,
)
from services.errors import ConflictError, NotFoundError, ValidationError

router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.get("", response_model=list[CategoryWithCountResponse])
async def list_categories_endpoint(db: DbSession) -> list[CategoryWithCountResponse]:
    """List categories by name with their product counts."""
    return await list_categories(db)


@router.get(
    "/{category_id}",
    response_model=CategoryDetailResponse,
    responses={404: {"description": "Category not found"}},
)
async def get_category_endpoint(
    category_id: str, db: DbSession
) -> CategoryDetailResponse:
    """Get a category with its products."""
    try:
        return await get_category(db, category_id)
    except NotFoundError as e:
        raise not_found_http_error(e)


@router.post(
    "",
    response_model=CategoryResponse,
    status_code=201,
    responses={422: {"model": ValidationErrorResponse}},
)
@limiter.limit(WRITE_LIMIT)
async def create_category_endpoint(
    request: Request, body: CategoryCreateRequest, db: DbSession
) -> CategoryResponse:
    try:
        return await create_category(db, body.name, body.description)
    except ValidationError as e:
        raise validation_http_error(e)


@router.put(
    "/{category_id}",
    response_model=CategoryResponse,
    responses={
        404: {"description": "Category not found"},
        422: {"model": ValidationErrorResponse},
    },
)
@limiter.limit(WRITE_LIMIT)
async def update_category_endpoint(
    request: Request,
    category_id: str,
    body: CategoryUpdateRequest,
    db: DbSession,
) -> CategoryResponse:
    try:
        return await update_category(db, category_id, body.name, body.description)
    except ValidationError as e:
        raise validation_http_error(e)
    except NotFoundError as e:
        raise not_found_http_error(e)


@router.delete(
    "/{category_id}",
    status_code=204,
    responses={
        404: {"description": "Category not found"},
        409: {"description": "Category has dependent products"},
    },
)
@limiter.limit(WRITE_LIMIT)
async def delete_category_endpoint(
    request: Request, category_id: str, db: DbSession
) -> Response:
    """Delete a category. Rejected while any product references it."""
    try:
        await delete_category(db, category_id)
    except NotFoundError as e:
        raise not_found_http_error(e)
    except ConflictError as e:
        raise conflict_http_error(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
