"""Product service: lifecycle, field rules, and soft deletion.

Products are never removed. ``delete_product`` flips ``active`` to False and
``update_product`` can flip it back, so the only states are Active and
Inactive and both stay readable through ``list_products``/``get_product``.
"""

from decimal import Decimal

from pydantic import AnyUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.logger import get_logger
from core.wide_event import set_wide_event_fields
from models import DEFAULT_STOCK_MINIMUM, Product
from repositories.product_repository import ProductRepository
from repositories.utils import is_foreign_key_violation
from schemas import ProductWithCategoryResponse
from services.categories_service import ensure_category_exists
from services.errors import NotFoundError, ValidationError

logger = get_logger(__name__)

_url_adapter = TypeAdapter(AnyUrl)

# products.price is NUMERIC(10, 2)
PRICE_DECIMAL_PLACES = 2
MAX_PRICE = Decimal("99999999.99")


def _validate_non_negative_int(field: str, value: object) -> int:
    # bool is an int subclass; True must not pass as a stock of 1
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValidationError(field, "must be an integer")
    if value < 0:
        raise ValidationError(field, "must be greater than or equal to 0")
    return value


def _validate_price(value: object) -> Decimal:
    if isinstance(value, bool) or not isinstance(value, (Decimal, int, float)):
        raise ValidationError("price", "must be a number")
    price = value if isinstance(value, Decimal) else Decimal(str(value))
    if not price.is_finite():
        raise ValidationError("price", "must be a number")
    if price <= 0:
        raise ValidationError("price", "must be greater than 0")
    if price > MAX_PRICE:
        raise ValidationError("price", f"must be at most {MAX_PRICE}")
    if price.normalize().as_tuple().exponent < -PRICE_DECIMAL_PLACES:
        raise ValidationError(
            "price", f"must have at most {PRICE_DECIMAL_PLACES} decimal places"
        )
    return price


def normalize_image_url(image_url: str | None) -> str | None:
    """Empty string means "no image"; anything else must parse as a URL."""
    if not image_url:
        return None
    try:
        _url_adapter.validate_python(image_url)
    except PydanticValidationError as e:
        raise ValidationError("image_url", "must be a valid URL") from e
    return image_url


def validate_product_fields(
    *,
    name: str | None,
    price: object,
    stock: object,
    stock_minimum: object,
    image_url: str | None,
    category_id: str | None,
) -> dict:
    """Check every product field rule and return the normalized values.

    Raises:
        ValidationError: On the first violated rule, naming the field.
    """
    if not name:
        raise ValidationError("name", "must not be empty")
    normalized = {
        "name": name,
        "price": _validate_price(price),
        "stock": _validate_non_negative_int("stock", stock),
        "stock_minimum": _validate_non_negative_int("stock_minimum", stock_minimum),
        "image_url": normalize_image_url(image_url),
    }
    if not category_id:
        raise ValidationError("category_id", "must not be empty")
    normalized["category_id"] = category_id
    return normalized


async def _reload(repo: ProductRepository, product_id: str) -> Product:
    product = await repo.get_by_id(product_id)
    if product is None:
        raise NotFoundError("product", product_id)
    return product


async def list_products(db: AsyncSession) -> list[ProductWithCategoryResponse]:
    """All products ordered by name, inactive included."""
    products = await ProductRepository(db).list_all()
    return [ProductWithCategoryResponse.model_validate(p) for p in products]


async def list_active_products(db: AsyncSession) -> list[ProductWithCategoryResponse]:
    """Active products ordered by name. This is the reporting feed."""
    products = await ProductRepository(db).list_active()
    return [ProductWithCategoryResponse.model_validate(p) for p in products]


async def get_product(db: AsyncSession, product_id: str) -> ProductWithCategoryResponse:
    """Get a product with its category, whether active or not.

    Raises:
        NotFoundError: If the product does not exist.
    """
    product = await _reload(ProductRepository(db), product_id)
    return ProductWithCategoryResponse.model_validate(product)


async def create_product(
    db: AsyncSession,
    *,
    name: str,
    price: Decimal,
    stock: int,
    category_id: str,
    description: str | None = None,
    stock_minimum: int | None = None,
    image_url: str | None = None,
) -> ProductWithCategoryResponse:
    """Create an active product in an existing category.

    Raises:
        ValidationError: If any field rule is violated.
        NotFoundError: If the category does not exist (nothing is written).
    """
    fields = validate_product_fields(
        name=name,
        price=price,
        stock=stock,
        stock_minimum=DEFAULT_STOCK_MINIMUM if stock_minimum is None else stock_minimum,
        image_url=image_url,
        category_id=category_id,
    )
    await ensure_category_exists(db, category_id)

    repo = ProductRepository(db)
    try:
        product = await repo.create(description=description, **fields)
    except IntegrityError as e:
        # Category deleted between the existence check and the insert
        if is_foreign_key_violation(e):
            raise NotFoundError("category", category_id) from e
        raise

    set_wide_event_fields(product_id=product.id, category_id=category_id)
    logger.info("product.created", product_id=product.id, category_id=category_id)

    product = await _reload(repo, product.id)
    return ProductWithCategoryResponse.model_validate(product)


async def update_product(
    db: AsyncSession,
    product_id: str,
    *,
    name: str,
    price: Decimal,
    stock: int,
    category_id: str,
    active: bool,
    description: str | None = None,
    stock_minimum: int | None = None,
    image_url: str | None = None,
) -> ProductWithCategoryResponse:
    """Overwrite a product's fields, including category and active flag.

    An omitted description or stock_minimum keeps the stored value; an
    omitted or empty image_url clears the image. Passing active=True
    reactivates a soft-deleted product.

    Raises:
        ValidationError: If any field rule is violated.
        NotFoundError: If the product or the target category does not exist.
    """
    if not isinstance(active, bool):
        raise ValidationError("active", "must be a boolean")

    repo = ProductRepository(db)
    product = await repo.get_by_id(product_id)
    if product is None:
        raise NotFoundError("product", product_id)

    fields = validate_product_fields(
        name=name,
        price=price,
        stock=stock,
        stock_minimum=product.stock_minimum if stock_minimum is None else stock_minimum,
        image_url=image_url,
        category_id=category_id,
    )
    await ensure_category_exists(db, category_id)

    was_active = product.active
    try:
        await repo.update(product, description=description, active=active, **fields)
    except IntegrityError as e:
        if is_foreign_key_violation(e):
            raise NotFoundError("category", category_id) from e
        raise

    set_wide_event_fields(product_id=product_id, category_id=category_id)
    logger.info(
        "product.updated",
        product_id=product_id,
        category_id=category_id,
        reactivated=active and not was_active,
    )

    product = await _reload(repo, product_id)
    return ProductWithCategoryResponse.model_validate(product)


async def delete_product(
    db: AsyncSession, product_id: str
) -> ProductWithCategoryResponse:
    """Soft-delete: mark the product inactive and return it.

    Idempotent. Deleting an inactive product changes nothing.

    Raises:
        NotFoundError: If the product does not exist.
    """
    repo = ProductRepository(db)
    product = await repo.get_by_id(product_id)
    if product is None:
        raise NotFoundError("product", product_id)

    if product.active:
        await repo.set_active(product, False)
        logger.info("product.deactivated", product_id=product_id)
    else:
        logger.info("product.deactivate.noop", product_id=product_id)

    set_wide_event_fields(product_id=product_id)
    product = await _reload(repo, product_id)
    return ProductWithCategoryResponse.model_validate(product)
