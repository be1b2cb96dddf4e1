"""Service layer for business logic.

Services encapsulate all business rules, keeping routes thin and focused
on HTTP handling.

Layer hierarchy:
    Routes (HTTP) -> Services (Business Logic) -> Repositories (Database)

Services should:
- Contain all inventory rules and validation
- Orchestrate calls to repositories
- Raise errors from services.errors for rule violations
- Return Pydantic response schemas, never ORM models

Services should NOT:
- Directly execute SQL queries (use repositories)
- Know about HTTP request/response details
- Commit the session (the request dependency owns the transaction)
"""
