"""Pydantic schemas for API request/response validation.

Request schemas only enforce types. Business rules (non-empty names,
positive prices, non-negative stock, URL format, category existence) live
in the services so every caller gets the same checks.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class CategoryCreateRequest(BaseModel):
    """Request to create a category."""

    name: str = Field(max_length=255)
    description: str | None = None


class CategoryUpdateRequest(CategoryCreateRequest):
    """Request to rename/describe a category. Omitted description is kept."""


class ProductCreateRequest(BaseModel):
    """Request to create a product."""

    name: str = Field(max_length=255)
    description: str | None = None
    price: Decimal
    stock: int
    stock_minimum: int | None = None
    image_url: str | None = None
    category_id: str = Field(max_length=36)


class ProductUpdateRequest(ProductCreateRequest):
    """Request to update a product. ``active`` is applied verbatim."""

    active: bool


class CategoryResponse(BaseModel):
    """Category response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CategoryWithCountResponse(CategoryResponse):
    """Category annotated with how many products reference it."""

    product_count: int


class ProductResponse(BaseModel):
    """Product response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str | None = None
    price: Decimal
    stock: int
    stock_minimum: int
    image_url: str | None = None
    category_id: str
    active: bool
    is_low_stock: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProductWithCategoryResponse(ProductResponse):
    """Product joined with its category."""

    category: CategoryResponse


class CategoryDetailResponse(CategoryResponse):
    """Category with its products ordered by name."""

    products: list[ProductResponse]


class ValuationResponse(BaseModel):
    """Sum of price * stock over active products."""

    total_valuation: Decimal


class InventorySummaryResponse(BaseModel):
    """Dashboard totals, each computed independently at read time."""

    total_active_products: int
    total_categories: int
    total_valuation: Decimal


class FieldErrorDetail(BaseModel):
    """A single violated business rule."""

    field: str
    constraint: str


class ValidationErrorResponse(BaseModel):
    detail: list[FieldErrorDetail]


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    service: str


class PoolStatusResponse(BaseModel):
    """Connection pool status."""

    pool_size: int
    checked_out: int
    overflow: int
    checked_in: int


class DetailedHealthResponse(HealthResponse):
    """Health check with component status."""

    database: bool
    pool: PoolStatusResponse | None = None
