"""Inventory reporting: low-stock detection and valuation.

Read-only composition over the category and product services. Inactive
products never count toward any figure here.
"""

from collections.abc import Iterable, Sequence
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from repositories.category_repository import CategoryRepository
from repositories.product_repository import ProductRepository
from schemas import (
    InventorySummaryResponse,
    ProductWithCategoryResponse,
    ValuationResponse,
)
from services.products_service import list_active_products


def is_low_stock(stock: int, stock_minimum: int) -> bool:
    """A product is low on stock when at or below its minimum."""
    return stock <= stock_minimum


def filter_low_stock(
    products: Sequence[ProductWithCategoryResponse],
) -> list[ProductWithCategoryResponse]:
    """Keep active low-stock products, preserving input order."""
    return [
        p for p in products if p.active and is_low_stock(p.stock, p.stock_minimum)
    ]


def compute_valuation(products: Iterable[ProductWithCategoryResponse]) -> Decimal:
    """Sum of price * stock over active products; Decimal 0 when empty."""
    return sum(
        (p.price * p.stock for p in products if p.active),
        Decimal("0"),
    )


async def get_low_stock_products(
    db: AsyncSession,
) -> list[ProductWithCategoryResponse]:
    """Active products whose stock is at or below their minimum, by name."""
    return filter_low_stock(await list_active_products(db))


async def get_inventory_valuation(db: AsyncSession) -> ValuationResponse:
    """Total value of active stock. Inactive products are left out."""
    return ValuationResponse(
        total_valuation=compute_valuation(await list_active_products(db))
    )


async def get_inventory_summary(db: AsyncSession) -> InventorySummaryResponse:
    """Dashboard totals. Each figure is read independently."""
    total_active_products = await ProductRepository(db).count_active()
    total_categories = await CategoryRepository(db).count()
    valuation = await get_inventory_valuation(db)

    return InventorySummaryResponse(
        total_active_products=total_active_products,
        total_categories=total_categories,
        total_valuation=valuation.total_valuation,
    )
