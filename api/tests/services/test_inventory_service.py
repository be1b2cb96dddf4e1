"""Tests for inventory_service (low stock, valuation, summary)."""

from decimal import Decimal

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

pytestmark = pytest.mark.integration

from services.inventory_service import (
    get_inventory_summary,
    get_inventory_valuation,
    get_low_stock_products,
)
from tests.factories import CategoryFactory, ProductFactory, create_async


class TestGetLowStockProducts:
    async def test_only_active_products_at_or_below_minimum(
        self, db_session: AsyncSession
    ):
        """A low, B stocked, C at its minimum but inactive -> only A."""
        category = await create_async(CategoryFactory, db_session)
        a = await create_async(
            ProductFactory,
            db_session,
            category=category,
            name="A",
            stock=2,
            stock_minimum=5,
        )
        await create_async(
            ProductFactory,
            db_session,
            category=category,
            name="B",
            stock=10,
            stock_minimum=5,
        )
        await create_async(
            ProductFactory,
            db_session,
            category=category,
            name="C",
            stock=5,
            stock_minimum=5,
            active=False,
        )

        result = await get_low_stock_products(db_session)

        assert [p.id for p in result] == [a.id]

    async def test_stock_equal_to_minimum_is_low(self, db_session: AsyncSession):
        await create_async(ProductFactory, db_session, stock=5, stock_minimum=5)

        result = await get_low_stock_products(db_session)

        assert len(result) == 1
        assert result[0].is_low_stock is True

    async def test_ordered_by_name(self, db_session: AsyncSession):
        category = await create_async(CategoryFactory, db_session)
        for name in ("Zinc", "Bolt", "Nail"):
            await create_async(
                ProductFactory,
                db_session,
                category=category,
                name=name,
                stock=0,
            )

        result = await get_low_stock_products(db_session)

        assert [p.name for p in result] == ["Bolt", "Nail", "Zinc"]


class TestGetInventoryValuation:
    async def test_sums_active_products_only(self, db_session: AsyncSession):
        """A: 10 * 3 active, B: 5 * 0 inactive -> 30."""
        category = await create_async(CategoryFactory, db_session)
        await create_async(
            ProductFactory,
            db_session,
            category=category,
            price=Decimal("10"),
            stock=3,
        )
        await create_async(
            ProductFactory,
            db_session,
            category=category,
            price=Decimal("5"),
            stock=0,
            active=False,
        )

        result = await get_inventory_valuation(db_session)

        assert result.total_valuation == Decimal("30")

    async def test_inactive_stock_never_counts(self, db_session: AsyncSession):
        await create_async(
            ProductFactory,
            db_session,
            price=Decimal("99.99"),
            stock=100,
            active=False,
        )

        result = await get_inventory_valuation(db_session)

        assert result.total_valuation == Decimal("0")

    async def test_empty_store_is_zero(self, db_session: AsyncSession):
        result = await get_inventory_valuation(db_session)

        assert result.total_valuation == Decimal("0")


class TestGetInventorySummary:
    async def test_totals(self, db_session: AsyncSession):
        garden = await create_async(CategoryFactory, db_session)
        await create_async(CategoryFactory, db_session)
        await create_async(
            ProductFactory,
            db_session,
            category=garden,
            price=Decimal("2.50"),
            stock=4,
        )
        await create_async(
            ProductFactory,
            db_session,
            category=garden,
            price=Decimal("1.00"),
            stock=1,
        )
        await create_async(
            ProductFactory,
            db_session,
            category=garden,
            price=Decimal("1000"),
            stock=1,
            active=False,
        )

        result = await get_inventory_summary(db_session)

        assert result.total_active_products == 2
        assert result.total_categories == 2
        assert result.total_valuation == Decimal("11.00")

    async def test_empty_store(self, db_session: AsyncSession):
        result = await get_inventory_summary(db_session)

        assert result.total_active_products == 0
        assert result.total_categories == 0
        assert result.total_valuation == Decimal("0")
