"""Inventory reporting endpoints for dashboards."""

from fastapi import APIRouter

from core.database import DbSession
from schemas import (
    InventorySummaryResponse,
    ProductWithCategoryResponse,
    ValuationResponse,
)
from services.inventory_service import (
    get_inventory_summary,
    get_inventory_valuation,
    get_low_stock_products,
)

router = APIRouter(prefix="/api/inventory", tags=["inventory"])


@router.get("/low-stock", response_model=list[ProductWithCategoryResponse])
async def low_stock_endpoint(db: DbSession) -> list[ProductWithCategoryResponse]:
    """Active products at or below their stock minimum."""
    return await get_low_stock_products(db)


@router.get("/valuation", response_model=ValuationResponse)
async def valuation_endpoint(db: DbSession) -> ValuationResponse:
    return await get_inventory_valuation(db)


@router.get("/summary", response_model=InventorySummaryResponse)
async def summary_endpoint(db: DbSession) -> InventorySummaryResponse:
    return await get_inventory_summary(db)
