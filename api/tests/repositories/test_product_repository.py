"""Tests for ProductRepository.

Tests product queries (always joined with category), writes, and the
active flag used for soft deletion.
"""

from decimal import Decimal

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

# Mark all tests in this module as integration tests (database required)
pytestmark = pytest.mark.integration

from repositories.product_repository import ProductRepository
from tests.factories import CategoryFactory, ProductFactory, create_async


class TestProductRepositoryLists:
    """Tests for list_all() and list_active()."""

    async def test_list_all_includes_inactive_ordered_by_name(
        self, db_session: AsyncSession
    ):
        category = await create_async(CategoryFactory, db_session)
        await create_async(ProductFactory, db_session, category=category, name="Saw")
        await create_async(
            ProductFactory, db_session, category=category, name="Axe", active=False
        )

        products = await ProductRepository(db_session).list_all()

        assert [p.name for p in products] == ["Axe", "Saw"]
        assert all(p.category.id == category.id for p in products)

    async def test_list_active_excludes_inactive(self, db_session: AsyncSession):
        category = await create_async(CategoryFactory, db_session)
        await create_async(ProductFactory, db_session, category=category, name="Saw")
        await create_async(
            ProductFactory, db_session, category=category, name="Axe", active=False
        )

        products = await ProductRepository(db_session).list_active()

        assert [p.name for p in products] == ["Saw"]


class TestProductRepositoryGetAndCount:
    """Tests for get_by_id(), count_by_category() and count_active()."""

    async def test_get_by_id_loads_category(self, db_session: AsyncSession):
        category = await create_async(CategoryFactory, db_session, name="Garden")
        product = await create_async(ProductFactory, db_session, category=category)

        loaded = await ProductRepository(db_session).get_by_id(product.id)

        assert loaded is not None
        assert loaded.category.name == "Garden"

    async def test_get_by_id_returns_none_when_missing(self, db_session: AsyncSession):
        assert await ProductRepository(db_session).get_by_id("missing") is None

    async def test_count_by_category_includes_inactive(
        self, db_session: AsyncSession
    ):
        category = await create_async(CategoryFactory, db_session)
        other = await create_async(CategoryFactory, db_session)
        await create_async(ProductFactory, db_session, category=category)
        await create_async(
            ProductFactory, db_session, category=category, active=False
        )
        await create_async(ProductFactory, db_session, category=other)

        repo = ProductRepository(db_session)

        assert await repo.count_by_category(category.id) == 2
        assert await repo.count_by_category(other.id) == 1

    async def test_count_active(self, db_session: AsyncSession):
        category = await create_async(CategoryFactory, db_session)
        await create_async(ProductFactory, db_session, category=category)
        await create_async(
            ProductFactory, db_session, category=category, active=False
        )

        assert await ProductRepository(db_session).count_active() == 1


class TestProductRepositoryWrites:
    """Tests for create(), update() and set_active()."""

    async def test_create_is_active(self, db_session: AsyncSession):
        category = await create_async(CategoryFactory, db_session)

        product = await ProductRepository(db_session).create(
            name="Hammer",
            price=Decimal("12.50"),
            stock=3,
            stock_minimum=5,
            category_id=category.id,
        )

        assert product.id
        assert product.active is True
        assert product.is_low_stock is True

    async def test_create_with_unknown_category_violates_foreign_key(
        self, db_session: AsyncSession
    ):
        with pytest.raises(IntegrityError):
            await ProductRepository(db_session).create(
                name="Hammer",
                price=Decimal("12.50"),
                stock=3,
                stock_minimum=5,
                category_id="missing",
            )

    async def test_update_overwrites_fields(self, db_session: AsyncSession):
        product = await create_async(ProductFactory, db_session, description="Old")
        target = await create_async(CategoryFactory, db_session)
        repo = ProductRepository(db_session)

        await repo.update(
            product,
            name="Renamed",
            price=Decimal("1.00"),
            stock=0,
            stock_minimum=0,
            category_id=target.id,
            active=False,
            description=None,
            image_url=None,
        )
        reloaded = await repo.get_by_id(product.id)

        assert reloaded is not None
        assert reloaded.name == "Renamed"
        assert reloaded.description == "Old"
        assert reloaded.category.id == target.id
        assert reloaded.active is False

    async def test_set_active_toggles_flag(self, db_session: AsyncSession):
        product = await create_async(ProductFactory, db_session)
        repo = ProductRepository(db_session)

        await repo.set_active(product, False)
        assert (await repo.get_by_id(product.id)).active is False

        await repo.set_active(product, True)
        assert (await repo.get_by_id(product.id)).active is True
