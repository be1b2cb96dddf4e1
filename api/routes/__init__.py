"""API route modules."""

from .categories_routes import router as categories_router
from .health_routes import router as health_router
from .inventory_routes import router as inventory_router
from .products_routes import router as products_router

__all__ = [
    "categories_router",
    "health_router",
    "inventory_router",
    "products_router",
]
