"""Product endpoints."""

from fastapi import APIRouter, Request

from core.database import DbSession
from core.ratelimit import WRITE_LIMIT, limiter
from routes.errors import not_found_http_error, validation_http_error
from schemas import (
    ProductCreateRequest,
    ProductUpdateRequest,
    ProductWithCategoryResponse,
    ValidationErrorResponse,
)
from services.errors import NotFoundError, ValidationError
from services.products_service import (
    create_product,
    delete_product,
    get_product,
    list_active_products,
    list_products,
    update_product,
)

router = APIRouter(prefix="/api/products", tags=["products"])


@router.get("", response_model=list[ProductWithCategoryResponse])
async def list_products_endpoint(db: DbSession) -> list[ProductWithCategoryResponse]:
    """List every product by name, inactive included."""
    return await list_products(db)


# Declared before /{product_id} so "active" is not captured as an id
@router.get("/active", response_model=list[ProductWithCategoryResponse])
async def list_active_products_endpoint(
    db: DbSession,
) -> list[ProductWithCategoryResponse]:
    return await list_active_products(db)


@router.get(
    "/{product_id}",
    response_model=ProductWithCategoryResponse,
    responses={404: {"description": "Product not found"}},
)
async def get_product_endpoint(
    product_id: str, db: DbSession
) -> ProductWithCategoryResponse:
    try:
        return await get_product(db, product_id)
    except NotFoundError as e:
        raise not_found_http_error(e)


@router.post(
    "",
    response_model=ProductWithCategoryResponse,
    status_code=201,
    responses={
        404: {"description": "Category not found"},
        422: {"model": ValidationErrorResponse},
    },
)
@limiter.limit(WRITE_LIMIT)
async def create_product_endpoint(
    request: Request, body: ProductCreateRequest, db: DbSession
) -> ProductWithCategoryResponse:
    try:
        return await create_product(
            db,
            name=body.name,
            description=body.description,
            price=body.price,
            stock=body.stock,
            stock_minimum=body.stock_minimum,
            image_url=body.image_url,
            category_id=body.category_id,
        )
    except ValidationError as e:
        raise validation_http_error(e)
    except NotFoundError as e:
        raise not_found_http_error(e)


@router.put(
    "/{product_id}",
    response_model=ProductWithCategoryResponse,
    responses={
        404: {"description": "Product or category not found"},
        422: {"model": ValidationErrorResponse},
    },
)
@limiter.limit(WRITE_LIMIT)
async def update_product_endpoint(
    request: Request,
    product_id: str,
    body: ProductUpdateRequest,
    db: DbSession,
) -> ProductWithCategoryResponse:
    """Update a product. Setting active=true reactivates a deleted product."""
    try:
        return await update_product(
            db,
            product_id,
            name=body.name,
            description=body.description,
            price=body.price,
            stock=body.stock,
            stock_minimum=body.stock_minimum,
            image_url=body.image_url,
            category_id=body.category_id,
            active=body.active,
        )
    except ValidationError as e:
        raise validation_http_error(e)
    except NotFoundError as e:
        raise not_found_http_error(e)


@router.delete(
    "/{product_id}",
    response_model=ProductWithCategoryResponse,
    responses={404: {"description": "Product not found"}},
)
@limiter.limit(WRITE_LIMIT)
async def delete_product_endpoint(
    request: Request, product_id: str, db: DbSession
) -> ProductWithCategoryResponse:
    """Soft-delete a product and return it (now inactive)."""
    try:
        return await delete_product(db, product_id)
    except NotFoundError as e:
        raise not_found_http_error(e)
