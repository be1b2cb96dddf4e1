"""Category repository for database operations."""

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from models import Category, Product
from repositories.utils import log_slow_query


class CategoryRepository:
    """Repository for Category database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    @log_slow_query("category.list_with_product_counts")
    async def list_with_product_counts(self) -> list[tuple[Category, int]]:
        """All categories ordered by name, each with its product count.

        Counts every referencing product, active or not.
        """
        product_count = func.count(Product.id).label("product_count")
        result = await self.db.execute(
            select(Category, product_count)
            .outerjoin(Product, Product.category_id == Category.id)
            .group_by(Category.id)
            .order_by(Category.name)
        )
        return [(category, count) for category, count in result.all()]

    @log_slow_query("category.get_by_id")
    async def get_by_id(self, category_id: str) -> Category | None:
        result = await self.db.execute(
            select(Category).where(Category.id == category_id)
        )
        return result.scalar_one_or_none()

    @log_slow_query("category.get_with_products")
    async def get_with_products(self, category_id: str) -> Category | None:
        """Get a category with its products loaded (ordered by name)."""
        result = await self.db.execute(
            select(Category)
            .where(Category.id == category_id)
            .options(selectinload(Category.products))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    @log_slow_query("category.exists")
    async def exists(self, category_id: str) -> bool:
        result = await self.db.execute(
            select(Category.id).where(Category.id == category_id)
        )
        return result.scalar_one_or_none() is not None

    @log_slow_query("category.count")
    async def count(self) -> int:
        result = await self.db.execute(select(func.count(Category.id)))
        return result.scalar_one()

    @log_slow_query("category.create")
    async def create(self, name: str, description: str | None = None) -> Category:
        category = Category(name=name, description=description)
        self.db.add(category)
        await self.db.flush()
        return category

    @log_slow_query("category.update")
    async def update(
        self,
        category: Category,
        *,
        name: str,
        description: str | None = None,
    ) -> Category:
        """Rename a category. description is only changed when not None."""
        category.name = name
        if description is not None:
            category.description = description
        await self.db.flush()
        return category

    @log_slow_query("category.delete")
    async def delete(self, category_id: str) -> int:
        """Delete a category by ID. Returns the number of rows removed.

        Raises IntegrityError if products still reference it.
        """
        result = await self.db.execute(
            delete(Category).where(Category.id == category_id)
        )
        return result.rowcount
