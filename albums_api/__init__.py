"""
Albums API — Application Package Initializer
=============================================

What: Marks the `albums_api` directory as a Python package.
Who:  Used by uvicorn (`albums_api.main:app`), pytest, and the `albums-api` script.

Architecture Note:
    The service is a thin layered mapping from HTTP routes to SQL statements:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← path/query/body parsing, status codes
    ├─────────────────────────────────────┤
    │         Services (Album CRUD)       │  ← one SQL statement per operation
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← one shared async engine
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
