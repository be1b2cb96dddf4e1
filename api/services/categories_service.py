"""Category service: lifecycle and the no-delete-while-referenced rule."""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.logger import get_logger
from core.wide_event import set_wide_event_fields
from repositories.category_repository import CategoryRepository
from repositories.product_repository import ProductRepository
from schemas import (
    CategoryDetailResponse,
    CategoryResponse,
    CategoryWithCountResponse,
    ProductResponse,
)
from services.errors import ConflictError, NotFoundError, ValidationError

logger = get_logger(__name__)

DEPENDENT_PRODUCTS_MESSAGE = "category has dependent products"


def validate_category_name(name: str | None) -> str:
    """Return the name unchanged, or raise if it is missing or empty."""
    if not name:
        raise ValidationError("name", "must not be empty")
    return name


async def list_categories(db: AsyncSession) -> list[CategoryWithCountResponse]:
    """All categories ordered by name, annotated with product counts."""
    repo = CategoryRepository(db)
    rows = await repo.list_with_product_counts()
    return [
        CategoryWithCountResponse(
            **CategoryResponse.model_validate(category).model_dump(),
            product_count=count,
        )
        for category, count in rows
    ]


async def get_category(db: AsyncSession, category_id: str) -> CategoryDetailResponse:
    """Get a category with its products ordered by name.

    Raises:
        NotFoundError: If the category does not exist.
    """
    category = await CategoryRepository(db).get_with_products(category_id)
    if category is None:
        raise NotFoundError("category", category_id)

    return CategoryDetailResponse(
        **CategoryResponse.model_validate(category).model_dump(),
        products=[ProductResponse.model_validate(p) for p in category.products],
    )


async def ensure_category_exists(db: AsyncSession, category_id: str) -> None:
    """Raise NotFoundError unless the category exists. Used by product writes."""
    if not await CategoryRepository(db).exists(category_id):
        raise NotFoundError("category", category_id)


async def create_category(
    db: AsyncSession, name: str, description: str | None = None
) -> CategoryResponse:
    """Create a category.

    Raises:
        ValidationError: If name is empty.
    """
    validate_category_name(name)

    category = await CategoryRepository(db).create(name, description)

    set_wide_event_fields(category_id=category.id)
    logger.info("category.created", category_id=category.id)
    return CategoryResponse.model_validate(category)


async def update_category(
    db: AsyncSession,
    category_id: str,
    name: str,
    description: str | None = None,
) -> CategoryResponse:
    """Rename/describe a category. An omitted description is left unchanged.

    Raises:
        ValidationError: If name is empty.
        NotFoundError: If the category does not exist.
    """
    validate_category_name(name)

    repo = CategoryRepository(db)
    category = await repo.get_by_id(category_id)
    if category is None:
        raise NotFoundError("category", category_id)

    category = await repo.update(category, name=name, description=description)

    set_wide_event_fields(category_id=category.id)
    logger.info("category.updated", category_id=category.id)
    return CategoryResponse.model_validate(category)


async def delete_category(db: AsyncSession, category_id: str) -> None:
    """Permanently delete a category that no product references.

    Inactive products still reference their category, so they block deletion.
    The foreign key (ON DELETE RESTRICT) rejects a delete that races with a
    concurrent product insert; that surfaces as the same ConflictError.

    Raises:
        NotFoundError: If the category does not exist.
        ConflictError: If any product references the category.
    """
    category_repo = CategoryRepository(db)
    if not await category_repo.exists(category_id):
        raise NotFoundError("category", category_id)

    product_count = await ProductRepository(db).count_by_category(category_id)
    if product_count > 0:
        logger.warning(
            "category.delete.rejected",
            category_id=category_id,
            product_count=product_count,
        )
        raise ConflictError(DEPENDENT_PRODUCTS_MESSAGE)

    try:
        deleted = await category_repo.delete(category_id)
    except IntegrityError as e:
        logger.warning("category.delete.fk_violation", category_id=category_id)
        raise ConflictError(DEPENDENT_PRODUCTS_MESSAGE) from e

    if not deleted:
        raise NotFoundError("category", category_id)

    set_wide_event_fields(category_id=category_id)
    logger.info("category.deleted", category_id=category_id)
