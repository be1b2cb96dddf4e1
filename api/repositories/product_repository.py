"""Product repository for database operations."""

from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from models import Product
from repositories.utils import log_slow_query


class ProductRepository:
    """Repository for Product database operations.

    Every read joins the product's category. Rows are never deleted here;
    deactivation is a flag update.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    def _select_with_category(self):
        return select(Product).options(joinedload(Product.category))

    @log_slow_query("product.list_all")
    async def list_all(self) -> list[Product]:
        """All products ordered by name, inactive ones included."""
        result = await self.db.execute(
            self._select_with_category().order_by(Product.name)
        )
        return list(result.scalars().all())

    @log_slow_query("product.list_active")
    async def list_active(self) -> list[Product]:
        result = await self.db.execute(
            self._select_with_category()
            .where(Product.active.is_(True))
            .order_by(Product.name)
        )
        return list(result.scalars().all())

    @log_slow_query("product.get_by_id")
    async def get_by_id(self, product_id: str) -> Product | None:
        """Get a product by ID with its category freshly loaded."""
        result = await self.db.execute(
            self._select_with_category()
            .where(Product.id == product_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    @log_slow_query("product.count_by_category")
    async def count_by_category(self, category_id: str) -> int:
        """Count products referencing a category, active or not."""
        result = await self.db.execute(
            select(func.count(Product.id)).where(Product.category_id == category_id)
        )
        return result.scalar_one()

    @log_slow_query("product.count_active")
    async def count_active(self) -> int:
        result = await self.db.execute(
            select(func.count(Product.id)).where(Product.active.is_(True))
        )
        return result.scalar_one()

    @log_slow_query("product.create")
    async def create(
        self,
        *,
        name: str,
        price: Decimal,
        stock: int,
        stock_minimum: int,
        category_id: str,
        description: str | None = None,
        image_url: str | None = None,
    ) -> Product:
        """Insert an active product.

        Raises IntegrityError if category_id no longer exists at flush time.
        """
        product = Product(
            name=name,
            description=description,
            price=price,
            stock=stock,
            stock_minimum=stock_minimum,
            image_url=image_url,
            category_id=category_id,
            active=True,
        )
        self.db.add(product)
        await self.db.flush()
        return product

    @log_slow_query("product.update")
    async def update(
        self,
        product: Product,
        *,
        name: str,
        price: Decimal,
        stock: int,
        stock_minimum: int,
        category_id: str,
        active: bool,
        description: str | None = None,
        image_url: str | None = None,
    ) -> Product:
        """Overwrite product fields. description is only changed when not None."""
        product.name = name
        if description is not None:
            product.description = description
        product.price = price
        product.stock = stock
        product.stock_minimum = stock_minimum
        product.image_url = image_url
        product.category_id = category_id
        product.active = active
        await self.db.flush()
        return product

    @log_slow_query("product.set_active")
    async def set_active(self, product: Product, active: bool) -> Product:
        product.active = active
        await self.db.flush()
        return product
