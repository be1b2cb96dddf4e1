"""Repository layer for database operations.

Repositories encapsulate all database queries, keeping services focused on
business rules. This separation provides:
- Single source of truth for database operations
- Easier testing (repositories can be mocked)
- Reusable queries across services
"""

from repositories.category_repository import CategoryRepository
from repositories.product_repository import ProductRepository
from repositories.utils import log_slow_query

__all__ = [
    "CategoryRepository",
    "ProductRepository",
    "log_slow_query",
]
