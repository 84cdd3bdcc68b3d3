"""
Bloglist Backend — Application Package Initializer
===================================================

What: Marks the `bloglist` directory as a Python package.
Who:  Imported by uvicorn (`bloglist.main:app`), Alembic and pytest.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     Auth dependency (AuthContext)   │  ← Bearer token → user
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Validation, ownership rules
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
